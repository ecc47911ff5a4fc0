"""Unit tests for coordinate normalization."""

import pytest

from gaia.lib.geocoder.base import InvalidCoordinateError
from gaia.lib.geocoder.coordinates import MAX_PREFIXES, format_key, normalize_coordinate, prefix_of, prefixes_around


class TestFormatKey:
    """Tests for format_key()."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("37.7749", "37.77490"),
            ("-122.4194", "-122.41940"),
            ("0", "0.00000"),
            ("12", "12.00000"),
            ("  37.7749  ", "37.77490"),
            ("1e-3", "0.00100"),
        ],
    )
    def test_pads_to_five_decimals(self, raw: str, expected: str) -> None:
        assert format_key(raw) == expected

    def test_rounds_half_up(self) -> None:
        assert format_key("37.774905") == "37.77491"
        assert format_key("37.774904999") == "37.77490"

    def test_rounds_negative_half_away_from_zero(self) -> None:
        assert format_key("-122.419405") == "-122.41941"

    def test_decimal_rounding_avoids_float_artefacts(self) -> None:
        """1.000005 is below the half in binary float but exact in decimal text."""
        assert format_key("1.000005") == "1.00001"

    def test_negative_zero_collapses(self) -> None:
        assert format_key("-0.000001") == "0.00000"
        assert format_key("-0") == "0.00000"

    def test_accepts_floats(self) -> None:
        assert format_key(37.7749) == "37.77490"
        assert format_key(-122) == "-122.00000"

    @pytest.mark.parametrize("raw", ["", "abc", "37.77.49", "nan", "NaN", "inf", "-Infinity", "1e400"])
    def test_rejects_unparseable(self, raw: str) -> None:
        with pytest.raises(InvalidCoordinateError, match="invalid coordinate"):
            format_key(raw)

    @pytest.mark.parametrize("raw", ["1_000", "37.77_49", "\u0661\u0662", "\uff13\uff17.5"])
    def test_rejects_underscores_and_non_ascii_digits(self, raw: str) -> None:
        with pytest.raises(InvalidCoordinateError):
            format_key(raw)

    def test_large_finite_values_keep_every_digit(self) -> None:
        assert format_key("1e30") == "1" + "0" * 30 + ".00000"
        assert format_key(-1e30) == "-1" + "0" * 30 + ".00000"

    def test_rejects_magnitude_beyond_key_precision(self) -> None:
        with pytest.raises(InvalidCoordinateError):
            format_key("1e123")

    def test_rejects_non_finite_float(self) -> None:
        with pytest.raises(InvalidCoordinateError):
            format_key(float("inf"))

    def test_rejects_bool(self) -> None:
        with pytest.raises(InvalidCoordinateError):
            format_key(True)  # type: ignore[arg-type]

    def test_error_is_a_value_error(self) -> None:
        with pytest.raises(ValueError, match="invalid lat"):
            format_key("north", "lat")


class TestPrefixOf:
    """Tests for prefix_of()."""

    def test_drops_last_digit(self) -> None:
        assert prefix_of("37.77490") == "37.7749"
        assert prefix_of("-122.41940") == "-122.4194"

    def test_key_matches_its_own_prefix(self) -> None:
        """A half-up rounded prefix would be 37.7750 and miss its own key."""
        key = format_key("37.77496")
        assert key == "37.77496"
        assert key.startswith(prefix_of(key))


class TestNormalizeCoordinate:
    """Tests for normalize_coordinate()."""

    def test_builds_keys_and_prefixes(self) -> None:
        coord = normalize_coordinate("37.7749", "-122.4194")
        assert coord.query_lat == "37.77490"
        assert coord.query_lon == "-122.41940"
        assert coord.prefix_lat == "37.7749"
        assert coord.prefix_lon == "-122.4194"

    def test_float_forms_derive_from_key(self) -> None:
        coord = normalize_coordinate("37.774904", "-122.419449")
        assert coord.latitude == float("37.77490")
        assert coord.longitude == float("-122.41945")

    def test_idempotent(self) -> None:
        first = normalize_coordinate("37.7749012", "-122.4194")
        second = normalize_coordinate(first.query_lat, first.query_lon)
        assert second == first

    def test_no_range_validation(self) -> None:
        """Out-of-range values pass through unchanged."""
        coord = normalize_coordinate("123.4", "-270")
        assert coord.query_lat == "123.40000"
        assert coord.query_lon == "-270.00000"

    def test_invalid_lat(self) -> None:
        with pytest.raises(InvalidCoordinateError, match="invalid lat"):
            normalize_coordinate("x", "-122.4194")

    def test_invalid_lon(self) -> None:
        with pytest.raises(InvalidCoordinateError, match="invalid lon"):
            normalize_coordinate("37.7749", "")


class TestPrefixesAround:
    """Tests for prefixes_around()."""

    def test_covers_neighbouring_cells(self) -> None:
        assert prefixes_around("37.77500", 0.00036) == [
            "37.7746",
            "37.7747",
            "37.7748",
            "37.7749",
            "37.7750",
            "37.7751",
            "37.7752",
            "37.7753",
        ]

    def test_includes_own_cell(self) -> None:
        assert prefixes_around("37.77496", 0.0) == ["37.7749"]

    def test_crosses_zero(self) -> None:
        """The cell just below zero holds keys -0.00009 through -0.00001."""
        prefixes = prefixes_around("0.00000", 0.00012)
        assert prefixes == ["-0.0001", "-0.0000", "0.0000", "0.0001"]

    def test_negative_keys(self) -> None:
        assert prefixes_around("-122.41940", 0.0001) == ["-122.4195", "-122.4194", "-122.4193"]

    def test_too_wide_band_returns_none(self) -> None:
        assert prefixes_around("37.77490", MAX_PREFIXES * 0.0001 + 0.001) is None
