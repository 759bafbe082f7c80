# src/heatsim_core/parser/raw_data.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..grid import GridSpec
from ..simulation.config import SimulationConfig

# The parser hands its result to the runner as frozen dataclasses rather than
# raw dictionaries.


@dataclass(frozen=True)
class ParsedControlScript:
    """Everything a run needs, as read from one control script."""
    source_path: Union[Path, str]
    config: SimulationConfig
    grid_spec: GridSpec
    output_prefix: str
