"""Unit tests for input validation helpers."""
import pytest

from ecogen_core.exceptions import ValidationError
from ecogen_core.utils import validate_memory


class TestMemoryValidation:
    """Tests for PM2 memory ceiling validation."""

    def test_valid_values(self):
        assert validate_memory("500M") == "500M"
        assert validate_memory("1G") == "1G"
        assert validate_memory("262144K") == "262144K"
        assert validate_memory(" 2g ") == "2G"

    def test_empty_rejected(self):
        for value in ("", "   "):
            with pytest.raises(ValidationError) as exc_info:
                validate_memory(value)
            assert exc_info.value.field == "max_memory_restart"

    def test_malformed_rejected(self):
        for value in ("lots", "500", "M500", "1.5G", "500MB", "-1G", "500 M"):
            with pytest.raises(ValidationError):
                validate_memory(value)

    def test_zero_rejected(self):
        with pytest.raises(ValidationError):
            validate_memory("0M")
