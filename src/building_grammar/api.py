"""FastAPI application with building generation endpoints."""

import json
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from building_grammar.assembly.building import BuildingBuilder
from building_grammar.config import ErrorResponse, GenerateResponse, ParameterSet
from building_grammar.errors import (
    BuildingGrammarError,
    GeometryError,
    InvalidParamsError,
)
from building_grammar.export.glb import export_glb_bytes
from building_grammar.export.off import export_off_text
from building_grammar.export.stl import export_stl_bytes
from building_grammar.loader import format_parameters
from building_grammar.settings import Settings

logger = logging.getLogger(__name__)

# Create app
app = FastAPI(title="Building Grammar", version="0.1.0")

# Settings
settings = Settings()

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error handlers
@app.exception_handler(InvalidParamsError)
async def invalid_params_handler(request: Request, exc: InvalidParamsError):
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error_type=type(exc).__name__,
            message=str(exc),
        ).model_dump(),
    )


@app.exception_handler(GeometryError)
async def geometry_error_handler(request: Request, exc: GeometryError):
    logger.exception("Geometry error during generation")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error_type=type(exc).__name__,
            message=str(exc),
        ).model_dump(),
    )


@app.exception_handler(BuildingGrammarError)
async def general_error_handler(request: Request, exc: BuildingGrammarError):
    logger.exception("Building grammar error")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error_type=type(exc).__name__,
            message=str(exc),
        ).model_dump(),
    )


# Dependency injection
def get_builder() -> BuildingBuilder:
    """Provide a BuildingBuilder instance. Overridable in tests."""
    return BuildingBuilder(settings)


def _filename(params: ParameterSet, suffix: str) -> str:
    return f"building_{params.shape.value}.{suffix}"


# API routes (sync def for CPU-bound work)
@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/generate")
def generate(params: ParameterSet, builder: BuildingBuilder = Depends(get_builder)):
    """Generate a building and return GLB bytes for 3D preview.

    Returns binary GLB with X-Build-Metadata header containing triangle
    count, bounding box, opening counts and warnings.
    """
    result = builder.build(params)
    glb_bytes = export_glb_bytes(result.manifold)

    metadata = GenerateResponse(
        triangle_count=result.triangle_count,
        bounding_box=tuple(result.bounding_box),
        is_watertight=result.is_watertight,
        facade_count=result.facade_count,
        opening_count=result.opening_count,
        door_count=result.door_count,
        railing_count=result.railing_count,
        warnings=result.warnings,
    )

    return Response(
        content=glb_bytes,
        media_type="application/octet-stream",
        headers={"X-Build-Metadata": json.dumps(metadata.model_dump(mode="json"))},
    )


@app.post("/export/off")
def export_off(params: ParameterSet, builder: BuildingBuilder = Depends(get_builder)):
    """Generate a building and return it as an OFF file."""
    result = builder.build(params)
    filename = _filename(params, "off")
    return PlainTextResponse(
        content=export_off_text(result.manifold),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.post("/export/stl")
def export_stl(params: ParameterSet, builder: BuildingBuilder = Depends(get_builder)):
    """Generate a building and return STL file for 3D printing."""
    result = builder.build(params)
    stl_bytes = export_stl_bytes(result.manifold)
    filename = _filename(params, "stl")

    return Response(
        content=stl_bytes,
        media_type="application/octet-stream",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.post("/parameters/echo")
def echo_parameters(params: ParameterSet):
    """Return a parameter set in parameter file format."""
    return PlainTextResponse(content=format_parameters(params))
