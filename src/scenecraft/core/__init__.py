"""Core scene compilation: normalize, validate and render.

Architecture Overview
---------------------
The core is a short pipeline of pure functions:

1. **Normalizers** (normalizers.py):
   - Trim strings, map missing values to ""
   - Pad or truncate environment anchors to exactly five slots

2. **Rule Set** (rules.py):
   - Ordered, declarative table of hard and soft checks

3. **Validation Engine** (engine.py):
   - Runs the table and decides whether the scene may compile

4. **Renderer** (renderer.py):
   - Serializes a valid scene into compact or expanded prompt text

5. **Compiler** (compiler.py):
   - Façade returning a tagged ``ok`` / ``blocked`` result

Supporting modules: models.py (Pydantic data model), config.py (Pydantic
Settings, SCENECRAFT_ prefix), errors.py (internal defect types) and
collaborators.py (suggestion provider and project store interfaces).

Usage Example
-------------
    from scenecraft.core import compile_scene

    result = compile_scene({
        "sceneHeart": "A fox reads by candlelight",
        "environmentAnchors": ["worn armchair", "steaming mug", "rain window"],
    })
"""

from scenecraft.core.collaborators import (
    ProjectStore,
    SuggestionProvider,
    parse_suggestions,
    request_suggestions,
)
from scenecraft.core.compiler import compile_scene, validate_scene
from scenecraft.core.config import SceneCraftConfig, config
from scenecraft.core.engine import validate
from scenecraft.core.errors import (
    CompilerDefect,
    MalformedSceneInput,
    RenderPreconditionError,
    RuleExecutionError,
)
from scenecraft.core.normalizers import normalize
from scenecraft.core.renderer import render
from scenecraft.core.rules import DEFAULT_RULES, Rule, RuleSettings, build_rules

__all__ = [
    "compile_scene",
    "validate_scene",
    "SceneCraftConfig",
    "config",
    "validate",
    "CompilerDefect",
    "MalformedSceneInput",
    "RenderPreconditionError",
    "RuleExecutionError",
    "normalize",
    "render",
    "DEFAULT_RULES",
    "Rule",
    "RuleSettings",
    "build_rules",
    "parse_suggestions",
    "request_suggestions",
    "SuggestionProvider",
    "ProjectStore",
]
