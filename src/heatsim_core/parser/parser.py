# src/heatsim_core/parser/parser.py
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import cerberus
import yaml

from ..constants import (
    DEFAULT_CONDUCTIVITY,
    DEFAULT_EXTENT_UM,
    DEFAULT_INITIAL_TEMPERATURE,
    DEFAULT_ORIGIN,
    DEFAULT_OUTPUT_PREFIX,
    DEFAULT_PITCH_UM,
)
from ..grid import GridSpec
from ..simulation.config import SimulationConfig
from ..units import to_micrometers, to_seconds
from .exceptions import ConfigFieldError, ConfigParseError, ConfigReadError, ControlScriptError
from .raw_data import ParsedControlScript

logger = logging.getLogger(__name__)

PLOT_DIRECTIVE = "plot"
WAIT_DIRECTIVE = "wait"


class EnhancedValidator(cerberus.Validator):
    """Custom Cerberus validator that understands grid lengths with units."""

    def _validate_length_quantity(self, constraint, field, value):
        """
        Validates that the value is a number of micrometers or a pint length string.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint:
            return
        try:
            to_micrometers(value)
        except ValueError as e:
            self._error(field, str(e))


class ControlScriptParser:
    """
    Parses and validates a YAML control script.

    The script holds two sections, written either as two YAML documents separated
    by '---' or as a single two-element list:

    1. A settings mapping with the required numeric keys `ambient_temp`,
       `max_timestep`, `min_timestep` and `max_step_tempchange`, plus the
       optional `output_prefix` and `geometry`.
    2. A list of directives, each either `plot` (snapshot at the current
       accumulated time) or `wait: <seconds>` (advance the accumulated time).
    """
    _number_rule = {"type": "number", "required": True}
    _length_rule = {"type": ["number", "string"], "length_quantity": True}

    _geometry_schema = {
        "origin": {"type": "list", "minlength": 3, "maxlength": 3, "schema": {"type": "number"}},
        "extent": {"type": "list", "minlength": 3, "maxlength": 3, "schema": _length_rule},
        "pitch": _length_rule,
        "initial_temp": {"type": "number"},
        "conductivity": {"type": "number", "min": 0},
    }

    _schema = {
        "ambient_temp": _number_rule,
        "max_timestep": _number_rule,
        "min_timestep": _number_rule,
        "max_step_tempchange": _number_rule,
        "output_prefix": {"type": "string", "required": False, "empty": False},
        "geometry": {"type": "dict", "required": False, "schema": _geometry_schema},
    }

    def __init__(self):
        self._validator = EnhancedValidator(self._schema)
        self._validator.allow_unknown = False
        logger.debug("ControlScriptParser initialized.")

    def parse(self, script_path: Union[str, Path]) -> ParsedControlScript:
        """Reads and parses the control script at `script_path`."""
        path = Path(script_path).resolve()
        logger.info(f"Loading control script: {path}")
        return self.parse_string(self._read_text(path), source_path=path)

    def parse_string(self, text: str, source_path: Optional[Union[str, Path]] = None) -> ParsedControlScript:
        """Parses control-script content held in memory."""
        source = source_path if source_path is not None else "<string>"
        settings, directives = self._split_sections(self._load_yaml(text, source), source)

        if not self._validator.validate(settings):
            raise ConfigFieldError(errors=self._validator.errors, file_path=source)
        validated = self._validator.document

        sim_time, plot_times = self._accumulate_directives(directives, source)
        try:
            config = SimulationConfig(
                ambient_temperature=float(validated["ambient_temp"]),
                min_dt=float(validated["min_timestep"]),
                max_dt=float(validated["max_timestep"]),
                max_delta_T=float(validated["max_step_tempchange"]),
                sim_time=sim_time,
                plot_times=tuple(plot_times),
            )
        except ValueError as e:
            raise ConfigFieldError(errors={"min_timestep": [str(e)]}, file_path=source) from e

        grid_spec = self._build_grid_spec(validated.get("geometry", {}))
        logger.info(
            f"Control script parsed: sim_time={sim_time}, {len(plot_times)} plot time(s), "
            f"dt in [{config.min_dt}, {config.max_dt}]"
        )
        return ParsedControlScript(
            source_path=source,
            config=config,
            grid_spec=grid_spec,
            output_prefix=validated.get("output_prefix", DEFAULT_OUTPUT_PREFIX),
        )

    # --- Loading ---

    def _read_text(self, source: Path) -> str:
        if not source.is_file():
            raise ConfigReadError(details=f"Control script not found at path: {source}", file_path=source)
        try:
            return source.read_text(encoding="utf-8")
        except PermissionError as e:
            raise ConfigReadError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigReadError(details=f"Could not read file: {e}", file_path=source) from e

    def _load_yaml(self, text: str, source) -> List[Any]:
        try:
            documents = [doc for doc in yaml.safe_load_all(text) if doc is not None]
        except yaml.YAMLError as e:
            raise ConfigParseError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
        if not documents:
            raise ConfigParseError(details="The control script is empty or contains no valid content.", file_path=source)
        return documents

    def _split_sections(self, documents: List[Any], source) -> Tuple[Dict[str, Any], List[Any]]:
        if len(documents) == 1 and isinstance(documents[0], list) and len(documents[0]) == 2:
            documents = documents[0]
        if len(documents) != 2:
            raise ConfigParseError(
                details=f"Expected two sections (settings and directives), found {len(documents)}.",
                file_path=source,
            )
        settings, directives = documents
        if not isinstance(settings, dict):
            raise ConfigParseError(details="The first section must be a mapping of settings.", file_path=source)
        if directives is None:
            directives = []
        if not isinstance(directives, list):
            raise ConfigParseError(details="The second section must be a list of directives.", file_path=source)
        return settings, directives

    # --- Directives ---

    def _accumulate_directives(self, directives: List[Any], source) -> Tuple[float, List[float]]:
        """Reduces the directive list to the total simulation time and the plot times."""
        accumulated = 0.0
        plot_times: List[float] = []
        for index, entry in enumerate(directives):
            if isinstance(entry, str) and entry == PLOT_DIRECTIVE:
                plot_times.append(accumulated)
            elif isinstance(entry, dict) and list(entry.keys()) == [WAIT_DIRECTIVE]:
                accumulated += self._wait_seconds(index, entry, source)
            else:
                raise ControlScriptError(
                    index=index, entry=entry, file_path=source,
                    details="Expected 'plot' or a single-key mapping 'wait: <seconds>'.",
                )
        logger.debug(f"Directives reduced to sim_time={accumulated}, plot_times={plot_times}")
        return accumulated, plot_times

    def _wait_seconds(self, index: int, entry: Dict[str, Any], source) -> float:
        try:
            seconds = to_seconds(entry[WAIT_DIRECTIVE])
        except ValueError as e:
            raise ControlScriptError(index=index, entry=entry, details=str(e), file_path=source) from e
        if not math.isfinite(seconds) or seconds < 0:
            raise ControlScriptError(
                index=index, entry=entry, file_path=source,
                details=f"Wait duration must be a finite, non-negative number of seconds, got {seconds}.",
            )
        return seconds

    # --- Geometry ---

    def _build_grid_spec(self, geometry: Dict[str, Any]) -> GridSpec:
        extent = geometry.get("extent")
        pitch = geometry.get("pitch")
        return GridSpec(
            origin=tuple(float(o) for o in geometry.get("origin", DEFAULT_ORIGIN)),
            extent=tuple(to_micrometers(e) for e in extent) if extent is not None else DEFAULT_EXTENT_UM,
            pitch=to_micrometers(pitch) if pitch is not None else DEFAULT_PITCH_UM,
            initial_temperature=float(geometry.get("initial_temp", DEFAULT_INITIAL_TEMPERATURE)),
            conductivity=float(geometry.get("conductivity", DEFAULT_CONDUCTIVITY)),
        )
