"""Coordinate normalization into fixed-precision cache keys.

A coordinate is keyed by its latitude and longitude rendered with exactly
five decimal places (half-up rounding). Dropping the last digit of a key
gives its four-decimal prefix, which names the grid cell the key falls in.
Lookups match cached keys against a set of such prefixes.
"""

from dataclasses import dataclass
from decimal import ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_UP, Context, Decimal, InvalidOperation

from gaia.lib.geocoder.base import InvalidCoordinateError

KEY_PRECISION = 5
PREFIX_PRECISION = 4

# Upper bound on prefixes enumerated for one axis of a lookup
MAX_PREFIXES = 128

_KEY_QUANTUM = Decimal(1).scaleb(-KEY_PRECISION)
_PREFIX_QUANTUM = Decimal(1).scaleb(-PREFIX_PRECISION)
# the cell just below zero holds one key fewer than the others
_CELL_STEP = _PREFIX_QUANTUM / 2

# Keys keep every integer digit of values below 1e123 in magnitude
_CONTEXT = Context(prec=128)


@dataclass(frozen=True)
class NormalizedCoordinate:
    """A query coordinate in key, prefix, and float form.

    The float forms are derived from the key, never the reverse.
    """

    query_lat: str
    query_lon: str
    prefix_lat: str
    prefix_lon: str

    @property
    def latitude(self) -> float:
        return float(self.query_lat)

    @property
    def longitude(self) -> float:
        return float(self.query_lon)


def _key_text(key: Decimal) -> str:
    if key.is_zero():
        # -0.00001 rounds toward "-0.00000"; keep a single key for zero
        key = key.copy_abs()
    return f"{key:.{KEY_PRECISION}f}"


def format_key(value: str | float, name: str = "coordinate") -> str:
    """Render a raw coordinate value with exactly five decimal places.

    Accepts plain decimal or exponent notation in ASCII. Digit-group
    underscores are rejected, as is any value of magnitude 1e123 or more.

    Args:
        value: Raw latitude or longitude, as text or a number.
        name: Label used in the error message.

    Returns:
        The fixed-precision key, e.g. ``"37.77490"``.

    Raises:
        InvalidCoordinateError: If the value is not a finite real number.
    """
    msg = f"invalid {name}: {value!r}"
    if isinstance(value, bool):
        raise InvalidCoordinateError(msg)
    text = value.strip() if isinstance(value, str) else repr(float(value))
    if not text.isascii() or "_" in text:
        raise InvalidCoordinateError(msg)
    try:
        parsed = Decimal(text)
        if not parsed.is_finite():
            raise InvalidOperation
        key = parsed.quantize(_KEY_QUANTUM, rounding=ROUND_HALF_UP, context=_CONTEXT)
    except InvalidOperation as e:
        raise InvalidCoordinateError(msg) from e
    return _key_text(key)


def prefix_of(key: str) -> str:
    """Return the four-decimal prefix of a five-decimal key.

    The prefix is the key with its last digit dropped, so a key always
    matches its own prefix.
    """
    return key[: len(key) - (KEY_PRECISION - PREFIX_PRECISION)]


def prefixes_around(key: str, half_width: float) -> list[str] | None:
    """Return the prefix of every cell holding a key within ``half_width`` degrees of ``key``.

    Returns ``None`` when the band spans more than ``MAX_PREFIXES`` cells.
    """
    center = Decimal(key)
    width = Decimal(repr(half_width))
    low = _CONTEXT.subtract(center, width).quantize(_KEY_QUANTUM, rounding=ROUND_FLOOR, context=_CONTEXT)
    high = _CONTEXT.add(center, width).quantize(_KEY_QUANTUM, rounding=ROUND_CEILING, context=_CONTEXT)
    span = _CONTEXT.subtract(high, low)
    if _CONTEXT.divide(span, _PREFIX_QUANTUM) > MAX_PREFIXES:
        return None

    steps = int(_CONTEXT.divide_int(span, _CELL_STEP))
    prefixes = {prefix_of(_key_text(_CONTEXT.add(low, _CELL_STEP * i))): None for i in range(steps + 1)}
    prefixes[prefix_of(_key_text(high))] = None
    return list(prefixes)


def normalize_coordinate(lat: str | float, lon: str | float) -> NormalizedCoordinate:
    """Normalize a raw latitude/longitude pair.

    No range validation is performed: values outside +/-90 and +/-180
    pass through unchanged.

    Raises:
        InvalidCoordinateError: If either value is not a finite real number.
    """
    query_lat = format_key(lat, "lat")
    query_lon = format_key(lon, "lon")
    return NormalizedCoordinate(
        query_lat=query_lat,
        query_lon=query_lon,
        prefix_lat=prefix_of(query_lat),
        prefix_lon=prefix_of(query_lon),
    )
