"""Tests for pdfops.rotation module."""

import pytest

from pdfops.exceptions import InvalidRotationError
from pdfops.rotation import compose_rotation, normalize_rotation, validate_rotation


class TestValidateRotation:
    """Test rotation angle validation."""

    @pytest.mark.parametrize("angle", [0, 90, 180, 270, 360, 450, -90, -270])
    def test_multiples_of_90_accepted(self, angle):
        validate_rotation(angle)

    @pytest.mark.parametrize("angle", [45, 1, -30, 100])
    def test_other_angles_rejected(self, angle):
        with pytest.raises(InvalidRotationError, match="multiple of 90"):
            validate_rotation(angle)

    def test_none_rejected(self):
        with pytest.raises(InvalidRotationError, match="required"):
            validate_rotation(None)

    def test_float_rejected(self):
        with pytest.raises(InvalidRotationError, match="integer"):
            validate_rotation(90.0)

    def test_bool_rejected(self):
        with pytest.raises(InvalidRotationError):
            validate_rotation(True)


class TestNormalizeRotation:
    """Test angle normalization into [0, 360)."""

    @pytest.mark.parametrize(
        "angle,expected",
        [(0, 0), (90, 90), (360, 0), (450, 90), (-90, 270), (-180, 180), (-450, 270)],
    )
    def test_normalize(self, angle, expected):
        assert normalize_rotation(angle) == expected


class TestComposeRotation:
    """Test adding a delta to an existing rotation."""

    def test_simple(self):
        assert compose_rotation(90, 90) == 180

    def test_wraps(self):
        assert compose_rotation(270, 180) == 90

    def test_back_to_zero(self):
        assert compose_rotation(90, 270) == 0
