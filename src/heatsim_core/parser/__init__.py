# src/heatsim_core/parser/__init__.py
from .raw_data import ParsedControlScript
from .parser import ControlScriptParser
from .exceptions import (
    BaseConfigError,
    ConfigReadError,
    ConfigParseError,
    ConfigFieldError,
    ControlScriptError,
)

__all__ = [
    # IR Data Structures
    "ParsedControlScript",
    # Parser and Exceptions
    "ControlScriptParser",
    "BaseConfigError",
    "ConfigReadError",
    "ConfigParseError",
    "ConfigFieldError",
    "ControlScriptError",
]
