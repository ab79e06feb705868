"""SceneCraft: FastAPI REST API layer.

This package exposes the scene compiler over HTTP for the editor front end.

Modules
-------
main
    FastAPI application with all route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request validation.
"""
