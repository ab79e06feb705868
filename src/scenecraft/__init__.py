"""SceneCraft - deterministic prompt compilation for structured image scenes."""

__version__ = "0.1.0"

from scenecraft.core.compiler import compile_scene, validate_scene
from scenecraft.core.config import SceneCraftConfig, config
from scenecraft.core.models import CompileBlocked, CompileOk, Diagnostic, SceneRecord

__all__ = [
    "compile_scene",
    "validate_scene",
    "SceneCraftConfig",
    "config",
    "CompileBlocked",
    "CompileOk",
    "Diagnostic",
    "SceneRecord",
]
