import math
import re

# Prefijos numéricos tal como llegan desde campos de formulario ("12.5kg" -> 12.5)
_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")


def _finite_float(value: int | float) -> float | None:
    # Un int de JSON puede no caber en un float (10**400)
    try:
        value = float(value)
    except OverflowError:
        return None
    return value if math.isfinite(value) else None


def is_number(value) -> bool:
    """True para int/float finitos (bool no cuenta como número)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return _finite_float(value) is not None


def parse_float(value) -> float | None:
    """Interpreta un valor crudo como float; None si no hay número finito."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return _finite_float(value)
    m = _FLOAT_PREFIX.match(str(value if value is not None else ""))
    if not m:
        return None
    parsed = float(m.group(0))
    return parsed if math.isfinite(parsed) else None


def parse_int(value) -> int | None:
    """Interpreta un valor crudo como entero truncando decimales ("7.9" -> 7)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    m = _INT_PREFIX.match(str(value if value is not None else ""))
    if not m:
        return None
    try:
        return int(m.group(0))
    except ValueError:
        # Más dígitos de los que int() acepta desde texto
        return None


def parse_float_safe(value, default: float = 0.0) -> float:
    parsed = parse_float(value)
    return default if parsed is None else parsed


def parse_int_safe(value, default: int = 0) -> int:
    parsed = parse_int(value)
    return default if parsed is None else parsed


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Redondeo comercial (0.5 sube), distinto del redondeo bancario de round()."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor
