# src/heatsim_core/parser/exceptions.py
"""
Defines the diagnosable exceptions for loading a control script.

Each stage of loading has its own error contract:

- `ConfigReadError`: the file could not be read at all.
- `ConfigParseError`: the file was read but is not well-formed YAML of the
  expected two-section shape.
- `ConfigFieldError`: a settings field is missing, non-numeric or inconsistent.
- `ControlScriptError`: a directive is neither `plot` nor `wait: <seconds>`.

All of them derive from `BaseConfigError`, so the runner can catch the whole
family with a single `except` clause and turn it into a `ConfigurationError`.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

from ..errors import DiagnosableError, format_diagnostic_report


def flatten_validation_errors(errors: Dict[str, Any], prefix: str = "") -> List[str]:
    """
    Flattens a nested Cerberus error mapping into "field.sub: message" lines.
    Nested schemas report as lists containing dicts; list items report by index.
    """
    lines = []
    for field_name, messages in sorted(errors.items(), key=lambda item: str(item[0])):
        path = f"{prefix}.{field_name}" if prefix else str(field_name)
        for message in messages:
            if isinstance(message, dict):
                lines.extend(flatten_validation_errors(message, path))
            else:
                lines.append(f"{path}: {message}")
    return lines


class BaseConfigError(DiagnosableError):
    """A local, concrete base class for all control-script loading errors."""
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Configuration Error",
            details=str(self),
            suggestion="Please check the format and content of the control script.",
            context={}
        )


@dataclass(frozen=True)
class ConfigReadError(BaseConfigError):
    """Raised when the control script cannot be read from disk."""
    details: str
    file_path: Union[Path, str]

    def __str__(self):
        return f"Could not read control script '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Control Script Read Error",
            details=self.details,
            suggestion="Ensure the file exists and has the correct read permissions.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class ConfigParseError(BaseConfigError):
    """Raised when the content is not well-formed YAML of the expected two-section shape."""
    details: str
    file_path: Union[Path, str]

    def __str__(self):
        return f"Parsing error in control script '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Control Script Parse Error",
            details=self.details,
            suggestion=(
                "A control script holds two YAML documents separated by '---': a settings mapping, "
                "then a list of 'plot' / 'wait: <seconds>' directives."
            ),
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class ConfigFieldError(BaseConfigError):
    """
    Raised when the settings section is structurally valid YAML but a required field
    is absent, has the wrong type, or is inconsistent with another field.
    `errors` uses the Cerberus layout: field name -> list of messages.
    """
    errors: Dict[str, Any]
    file_path: Union[Path, str]

    def __str__(self):
        error_lines = [f"  - {line}" for line in flatten_validation_errors(self.errors)]
        return (
            f"Settings validation failed for control script '{self.file_path}':\n"
            + "\n".join(error_lines)
        )

    def get_diagnostic_report(self) -> str:
        error_list = flatten_validation_errors(self.errors)
        error_list_str = "\n".join(f"  - Field {line}" for line in error_list)
        details = (
            "The settings section does not conform to the required format.\n"
            f"See details for {len(error_list)} issue(s) below:\n\n{error_list_str}"
        )
        return format_diagnostic_report(
            error_type="Control Script Field Error",
            details=details,
            suggestion=(
                "Provide numeric values for 'ambient_temp', 'max_timestep', 'min_timestep' and "
                "'max_step_tempchange', with 0 < min_timestep <= max_timestep."
            ),
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class ControlScriptError(BaseConfigError):
    """Raised when an entry of the directive list is not a recognized `plot` / `wait` form."""
    index: int
    entry: Any
    details: str
    file_path: Union[Path, str]

    def __str__(self):
        return f"Invalid directive at index {self.index} ({self.entry!r}) in '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Control Script Directive",
            details=f"Directive #{self.index} is {self.entry!r}.\n{self.details}",
            suggestion="Each directive must be the word 'plot' or a mapping 'wait: <seconds>'.",
            context={'source_file': self.file_path, 'user_input': repr(self.entry)}
        )
