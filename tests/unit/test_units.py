"""Tests for pdfops.units module."""

import pytest

from pdfops.constants import UNIT_TO_POINTS
from pdfops.exceptions import ConfigError
from pdfops.units import parse_coordinate, parse_dimension, parse_page_size


class TestParseDimension:
    """Test dimension string parsing."""

    def test_millimeters(self):
        result = parse_dimension("100mm")
        expected = 100 * UNIT_TO_POINTS["mm"]
        assert abs(result - expected) < 0.01

    def test_inches(self):
        assert parse_dimension("4in") == 288.0  # 4 * 72

    def test_points(self):
        assert parse_dimension("72pt") == 72.0

    def test_case_insensitive(self):
        assert parse_dimension("4IN") == 288.0

    def test_with_whitespace(self):
        assert parse_dimension("  4in  ") == 288.0

    def test_empty_string_raises(self):
        with pytest.raises(ConfigError, match="Empty"):
            parse_dimension("")

    def test_no_unit_raises(self):
        with pytest.raises(ConfigError, match="Invalid dimension"):
            parse_dimension("100")

    def test_invalid_unit_raises(self):
        with pytest.raises(ConfigError, match="Invalid dimension"):
            parse_dimension("100px")

    @pytest.mark.parametrize("value", ["1.2.3mm", ".mm", "..5in", "5.in"])
    def test_malformed_number_raises(self, value):
        with pytest.raises(ConfigError, match="Invalid dimension"):
            parse_dimension(value)

    def test_leading_point(self):
        assert parse_dimension(".5in") == pytest.approx(36.0)


class TestParseCoordinate:
    """Test numeric or unit coordinates."""

    def test_number(self):
        assert parse_coordinate(100) == 100.0

    def test_string(self):
        assert parse_coordinate("1in") == 72.0


class TestParsePageSize:
    """Test page size resolution."""

    def test_a4(self):
        width, height = parse_page_size("A4")
        assert width == pytest.approx(595.28, abs=0.01)
        assert height == pytest.approx(841.89, abs=0.01)

    def test_lowercase_name(self):
        assert parse_page_size("letter") == (612.0, 792.0)

    def test_uppercase_name(self):
        assert parse_page_size("LETTER") == (612.0, 792.0)

    def test_pair_with_units(self):
        assert parse_page_size(("8.5in", "11in")) == (612.0, 792.0)

    def test_list_pair(self):
        assert parse_page_size([400, 600]) == (400.0, 600.0)

    def test_unknown_name_raises(self):
        with pytest.raises(ConfigError, match="Unknown page size"):
            parse_page_size("postcard")

    def test_function_name_rejected(self):
        # reportlab.lib.pagesizes.landscape is a helper, not a size
        with pytest.raises(ConfigError, match="Unknown page size"):
            parse_page_size("landscape")

    def test_zero_size_raises(self):
        with pytest.raises(ConfigError, match="positive"):
            parse_page_size([0, 600])

    def test_wrong_arity_raises(self):
        with pytest.raises(ConfigError, match="Invalid page size"):
            parse_page_size([100, 200, 300])
