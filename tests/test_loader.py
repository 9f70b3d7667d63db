"""Tests for parameter file parsing, resolution and echo."""

import logging

import pytest

from building_grammar.components.facade import match_railing
from building_grammar.config import Topology
from building_grammar.errors import InvalidParamsError
from building_grammar.layout.footprint import enumerate_facades
from building_grammar.loader import (
    format_parameters,
    load_parameters,
    parse_parameter_text,
    resolve_parameters,
    write_parameters,
)

SAMPLE = """\
// Rectangle with a few fixed values
Shape Type = 1
Building Width 1 = 400
Building Length 1 = 300, 350
Building Height = 500
Grid Height = 3
Window Centre Design = 4
//Railings = (50,-1,1)
Remove Window = (0,1,1),(-1,2,2)
Railings = (40,2,-1)
"""


class TestParse:
    def test_numbers_and_ranges(self):
        entries = parse_parameter_text(SAMPLE)
        assert entries["Shape Type"] == 1
        assert entries["Building Length 1"] == (300, 350)

    def test_comments_skipped(self):
        entries = parse_parameter_text(SAMPLE)
        assert entries["Railings"] == [(40, 2, -1)]

    def test_removal_triples(self):
        entries = parse_parameter_text(SAMPLE)
        assert entries["Remove Window"] == [(0, 1, 1), (-1, 2, 2)]

    def test_old_echo_spellings(self):
        entries = parse_parameter_text(
            "Window Center Design = 3\nGrid Bottom Tile Height = 120\n"
        )
        assert entries["Window Centre Design"] == 3
        assert entries["Bottom Tile Height"] == 120

    def test_unknown_key_ignored(self, caplog):
        with caplog.at_level(logging.WARNING):
            entries = parse_parameter_text("Roof Colour = 3\n")
        assert entries == {}
        assert "Roof Colour" in caplog.text

    def test_bad_number_raises(self):
        with pytest.raises(InvalidParamsError, match="Building Height"):
            parse_parameter_text("Building Height = tall\n")

    def test_inverted_range_raises(self):
        with pytest.raises(InvalidParamsError, match="exceeds"):
            parse_parameter_text("Grid Height = 5, 2\n")

    def test_missing_equals_raises(self):
        with pytest.raises(InvalidParamsError, match="line 1"):
            parse_parameter_text("Shape Type 1\n")

    def test_short_triple_raises(self):
        with pytest.raises(InvalidParamsError, match="3 values"):
            parse_parameter_text("Remove Window = (1,2)\n")


class TestResolve:
    def test_explicit_values(self):
        params = resolve_parameters(parse_parameter_text(SAMPLE), seed=1)
        assert params.shape == Topology.RECTANGLE
        assert params.width_1 == 400
        assert 300 <= params.length_1 <= 350
        assert params.window_center.design == 4
        assert len(params.removals) == 2
        assert params.removals[1].column == -1
        assert params.railings[0].scale == 40

    def test_file_sides_count_from_one(self):
        params = resolve_parameters(parse_parameter_text(SAMPLE), seed=1)
        assert [r.side for r in params.removals] == [0, 1]
        assert params.railings[0].side == -1

    def test_railing_on_first_facade(self):
        params = resolve_parameters(
            parse_parameter_text("Shape Type = 1\nRailings = (50,-1,1)\n"), seed=0
        )
        front, right = enumerate_facades(params)[:2]
        assert match_railing(params.railings, 1, front.side) is not None
        assert match_railing(params.railings, 1, right.side) is None

    def test_negative_side_is_wildcard(self):
        params = resolve_parameters({"Remove Window": [(-1, -1, -3)]}, seed=0)
        assert params.removals[0].side == -1

    def test_side_zero_rejected(self):
        with pytest.raises(InvalidParamsError, match="sides count from 1"):
            resolve_parameters({"Remove Window": [(0, 1, 0)]}, seed=0)

    def test_same_seed_same_parameters(self):
        entries = parse_parameter_text(SAMPLE)
        assert resolve_parameters(entries, seed=7) == resolve_parameters(entries, seed=7)

    @pytest.mark.parametrize("seed", range(30))
    def test_default_ranges_always_valid(self, seed):
        params = resolve_parameters({}, seed=seed)
        assert 200 <= params.height <= 1000
        assert params.height / 30 <= params.overhang.width <= params.height / 20
        assert params.height - 2 * params.bottom_tile_height > 0
        assert 2 <= params.grid_height <= 5
        assert 1 <= params.window_top.design <= 5

    @pytest.mark.parametrize("seed", range(20))
    def test_random_polygon_is_never_square(self, seed):
        params = resolve_parameters({"Shape Type": 2.0}, seed=seed)
        assert params.sides in (3, 5, 6)

    def test_explicit_square_polygon_allowed(self):
        params = resolve_parameters({"Shape Type": 2.0, "Sides": 4.0}, seed=0)
        assert params.sides == 4

    def test_polygon_copies_first_column_count(self):
        entries = parse_parameter_text(
            "Shape Type = 2\nSides = 5\nGrid Bottom Width = 3\nGrid Bottom Length = 5\n"
        )
        params = resolve_parameters(entries, seed=0)
        assert params.grid_bottom.columns == (3,) * 6

    def test_unknown_shape_raises(self):
        with pytest.raises(InvalidParamsError, match="Shape Type"):
            resolve_parameters({"Shape Type": 7.0})

    def test_invalid_values_rejected(self):
        with pytest.raises(InvalidParamsError):
            resolve_parameters({"Building Height": 100.0, "Bottom Tile Height": 60.0})


class TestEcho:
    def test_echo_resolves_to_same_set(self):
        params = resolve_parameters(parse_parameter_text(SAMPLE), seed=3)
        again = resolve_parameters(parse_parameter_text(format_parameters(params)), seed=99)
        exclude = {"vertical_offset"}
        assert again.model_dump(exclude=exclude) == params.model_dump(exclude=exclude)
        assert again.effective_vertical_offset == params.effective_vertical_offset

    def test_echo_lists(self):
        params = resolve_parameters(parse_parameter_text(SAMPLE), seed=3)
        text = format_parameters(params)
        assert "Remove Window = (0,1,1),(-1,2,2)" in text
        assert "Railings = (40,2,-1)" in text

    def test_echo_omits_empty_lists(self):
        text = format_parameters(resolve_parameters({}, seed=0))
        assert "Remove Window" not in text
        assert "Railings" not in text


class TestLoad:
    def test_load_file(self, tmp_path):
        path = tmp_path / "input_parameters.txt"
        path.write_text(SAMPLE)
        assert load_parameters(path, seed=1).width_1 == 400

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(InvalidParamsError, match="not found"):
            load_parameters(tmp_path / "nope.txt")

    def test_no_file_uses_defaults(self):
        assert load_parameters(None, seed=5) == resolve_parameters({}, seed=5)

    def test_write_parameters(self, tmp_path):
        params = resolve_parameters({}, seed=2)
        path = write_parameters(params, tmp_path / "out" / "params.txt")
        assert load_parameters(path).shape == params.shape
