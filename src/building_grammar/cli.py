"""Command-line entry point: generate a building shell from a parameter file.

Usage:
    building-grammar generate input_parameters.txt --seed 7
    building-grammar generate --output tower.stl --echo-params tower.txt
"""

import argparse
import logging
import sys
from pathlib import Path

from building_grammar.assembly.building import BuildingBuilder
from building_grammar.errors import BuildingGrammarError
from building_grammar.export.off import write_off
from building_grammar.export.stl import write_stl
from building_grammar.loader import load_parameters, write_parameters
from building_grammar.settings import Settings
from building_grammar.validation.checks import require_valid

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="building-grammar",
        description="Procedurally generate building shells",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Generate one building")
    gen.add_argument(
        "params", nargs="?", default=None,
        help="Parameter file (default: built-in ranges)",
    )
    gen.add_argument("--seed", type=int, default=None, help="Random seed for ranges")
    gen.add_argument(
        "--output", default=None,
        help="Output mesh path; .stl writes STL, anything else OFF "
             "(default: building_<shape>.off)",
    )
    gen.add_argument(
        "--echo-params", default=None,
        help="Write the resolved parameters to this path",
    )
    gen.add_argument(
        "--validate", action="store_true",
        help="Fail if the mesh does not pass the validation checks",
    )
    parser.add_argument("--log-level", default=None, help="Logging level override")
    return parser


def generate(args: argparse.Namespace, settings: Settings) -> Path:
    params = load_parameters(args.params, seed=args.seed)
    if args.echo_params:
        path = write_parameters(params, args.echo_params)
        logger.info("Wrote resolved parameters to %s", path)

    result = BuildingBuilder(settings).build(params)
    if args.validate:
        require_valid(result.manifold, max_triangles=settings.max_triangles)

    output = Path(args.output or f"building_{params.shape.value}.off")
    if output.suffix.lower() == ".stl":
        write_stl(result.manifold, output)
    else:
        write_off(result.manifold, output)
    logger.info("Saved %s (%d triangles)", output, result.triangle_count)
    return output


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    logging.getLogger().setLevel((args.log_level or settings.log_level).upper())

    try:
        output = generate(args, settings)
    except BuildingGrammarError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    print(f"Saved file as: {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
