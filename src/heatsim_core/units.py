# src/heatsim_core/units.py
import logging
import math
from numbers import Real
from typing import Union

import pint

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.debug("Pint Unit Registry initialized.")

# --- Canonical dimensionality objects for explicit checks ---
LENGTH_DIMENSIONALITY = ureg.parse_expression('meter').dimensionality
TIME_DIMENSIONALITY = ureg.parse_expression('second').dimensionality

#: Grid lengths (extent, pitch) are integers in this unit.
GRID_LENGTH_UNIT = ureg.micrometer


def _is_plain_number(value) -> bool:
    # YAML booleans are ints in Python; they are never valid magnitudes.
    return isinstance(value, Real) and not isinstance(value, bool)


def to_micrometers(value: Union[Real, str]) -> int:
    """
    Converts a grid length to an integer number of micrometers.

    Plain numbers are taken to already be in micrometers. Strings are parsed by
    pint and must carry a length dimension (e.g. "10 cm"). Fractional
    micrometers are truncated toward zero, matching the integer grid model.

    Raises:
        ValueError: If the value is not a finite number or a length string.
    """
    if _is_plain_number(value):
        magnitude = float(value)
    elif isinstance(value, str):
        try:
            qty = Quantity(value)
        except (pint.PintError, ValueError, TypeError, SyntaxError, AttributeError) as e:
            raise ValueError(f"Cannot interpret '{value}' as a length: {e}") from e
        if not isinstance(qty, Quantity) or qty.dimensionality != LENGTH_DIMENSIONALITY:
            raise ValueError(f"'{value}' is not a length (expected units such as 'um', 'mm' or 'cm').")
        # Rounded first so conversion noise (9999.999999... um) is not truncated away.
        magnitude = round(float(qty.to(GRID_LENGTH_UNIT).magnitude), 6)
    else:
        raise ValueError(f"Expected a number of micrometers or a length string, got {type(value).__name__}.")
    if not math.isfinite(magnitude):
        raise ValueError(f"Length must be finite, got {value!r}.")
    return int(magnitude)


def to_seconds(value: Union[Real, str]) -> float:
    """
    Converts a duration to seconds. Plain numbers are seconds already; strings
    must be pint expressions with a time dimension (e.g. "2 min").

    Raises:
        ValueError: If the value is not a number or a duration string.
    """
    if _is_plain_number(value):
        return float(value)
    if not isinstance(value, str):
        raise ValueError(f"Expected a number of seconds or a duration string, got {type(value).__name__}.")
    try:
        qty = Quantity(value)
    except (pint.PintError, ValueError, TypeError, SyntaxError, AttributeError) as e:
        raise ValueError(f"Cannot interpret '{value}' as a duration: {e}") from e
    if not isinstance(qty, Quantity) or qty.dimensionality != TIME_DIMENSIONALITY:
        raise ValueError(f"'{value}' is not a duration (expected units such as 's', 'min' or 'h').")
    return float(qty.to(ureg.second).magnitude)
