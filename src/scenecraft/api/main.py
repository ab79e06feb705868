"""SceneCraft: FastAPI Application.

This module defines the FastAPI ``app`` instance, the REST routes that expose
the scene compiler, and the ``main()`` CLI function that launches uvicorn.

Architecture
------------
The API is a thin, stateless wrapper around :mod:`scenecraft.core`:

- Every request carries the whole scene; nothing is stored between calls.
- A blocked compile is a normal ``200`` response whose body has
  ``status == "blocked"``.  HTTP errors are reserved for malformed input
  (``422``) and internal compiler defects (``500``).

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
GET       ``/api/config``               Enums, output modes and rule table
POST      ``/api/scene/validate``       Diagnostics for live editor feedback
POST      ``/api/scene/compile``        Compile a scene into prompt text
========  ============================  ====================================

Usage
-----
CLI (installed entry point)::

    scenecraft

Direct invocation::

    python -m scenecraft.api.main
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from scenecraft import __version__
from scenecraft.api.models import CompileRequest, SceneInput
from scenecraft.core.compiler import compile_scene, validate_scene
from scenecraft.core.config import config
from scenecraft.core.errors import CompilerDefect, MalformedSceneInput
from scenecraft.core.models import FRAMINGS, LENSES
from scenecraft.core.renderer import OUTPUT_MODES
from scenecraft.core.rules import DEFAULT_RULES

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="SceneCraft",
    description="Scene validation and deterministic prompt compilation API.",
    version=__version__,
)

# Allow cross-origin requests so the editor can be served from a different
# port during development.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Exception handlers.
# ---------------------------------------------------------------------------


@app.exception_handler(MalformedSceneInput)
async def malformed_input_handler(request: Request, exc: MalformedSceneInput) -> JSONResponse:
    """Report a scene whose shape the normalizers cannot interpret."""
    logger.warning(f"Malformed scene input on {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(CompilerDefect)
async def compiler_defect_handler(request: Request, exc: CompilerDefect) -> JSONResponse:
    """Turn an internal compiler fault into a generic 500 response.

    The full traceback goes to the log; the client only learns that the
    compiler failed, never which rule or why.
    """
    logger.exception(f"Compiler defect on {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal compiler error"})


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/api/config")
async def get_config() -> dict:
    """Return the choices and rule table the editor needs.

    Returns:
        Dictionary with keys ``version``, ``framings``, ``lenses``,
        ``output_modes``, ``default_output_mode``, ``anchor_slots``,
        ``required_anchor_slots`` and ``rules`` (each with ``id``,
        ``severity``, ``field`` and ``description``).
    """
    return {
        "version": __version__,
        "framings": list(FRAMINGS),
        "lenses": list(LENSES),
        "output_modes": list(OUTPUT_MODES),
        "default_output_mode": config.default_output_mode,
        "anchor_slots": config.anchor_slots,
        "required_anchor_slots": config.required_anchor_slots,
        "rules": [
            {
                "id": rule.rule_id,
                "severity": rule.severity,
                "field": rule.field,
                "description": rule.description,
            }
            for rule in DEFAULT_RULES
        ],
    }


@app.post("/api/scene/validate")
async def validate_scene_route(scene: SceneInput) -> dict:
    """Validate a scene without rendering it.

    Args:
        scene: Partially populated scene from the editor.

    Returns:
        Dictionary with ``can_compile`` and the ordered ``diagnostics``.
    """
    result = validate_scene(scene)
    return result.model_dump()


@app.post("/api/scene/compile")
async def compile_scene_route(req: CompileRequest) -> dict:
    """Compile a scene into prompt text.

    Args:
        req: Validated :class:`CompileRequest` payload.

    Returns:
        Either ``{"status": "ok", "prompt": ..., "warnings": [...]}`` or
        ``{"status": "blocked", "errors": [...], "warnings": [...]}``.
    """
    result = compile_scene(req.scene, output_mode=req.output_mode)
    return result.model_dump()


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host, port and log level from :data:`~scenecraft.core.config.config`
    (``SCENECRAFT_SERVER_HOST``, ``SCENECRAFT_SERVER_PORT``,
    ``SCENECRAFT_LOG_LEVEL``).  Defaults to ``0.0.0.0:7860``.

    This function is registered as the ``scenecraft`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "scenecraft.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
