"""
Tests for JSON Schema Contract Validators

Тестирование:
- Валидность самих схем (meta-validation при загрузке)
- Десятичный текст: допустимые и недопустимые формы
- Разбор SignedInteger через контракт десятичного текста
- Документ конфигурации
"""

from pathlib import Path

import pytest
from jsonschema import ValidationError

from bignum.core.contracts import (
    ArithmeticConfigValidator,
    DecimalIntegerValidator,
    SchemaLoader,
    validate_arithmetic_config,
)
from bignum.core.domain import SignedInteger
from bignum.core.math.errors import DecimalFormatError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    """Загрузка и кэширование схем."""

    @pytest.mark.parametrize("name", ["decimal_integer", "arithmetic_config"])
    def test_schemas_load(self, name):
        schema = SchemaLoader().load_schema(name)
        assert schema["$schema"].endswith("2020-12/schema")

    def test_cache_returns_same_object(self):
        loader = SchemaLoader()
        assert loader.load_schema("decimal_integer") is loader.load_schema("decimal_integer")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("no_such_contract")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "absent")

    def test_invalid_schema_rejected(self, tmp_path):
        (tmp_path / "broken.json").write_text('{"type": 12}', encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(Path(tmp_path)).load_schema("broken")


# =============================================================================
# DECIMAL TEXT
# =============================================================================


class TestDecimalIntegerContract:
    """Входной десятичный текст."""

    @pytest.mark.parametrize("text", ["0", "-0", "007", "-123", "123456789012345678901234567890"])
    def test_valid(self, text):
        DecimalIntegerValidator().validate(text)

    @pytest.mark.parametrize(
        "text", ["", "-", "+1", "1.5", " 1", "1 ", "1\n", "12a", "--1", "1-"]
    )
    def test_invalid(self, text):
        with pytest.raises(ValidationError):
            DecimalIntegerValidator().validate(text)
        with pytest.raises(DecimalFormatError):
            SignedInteger.parse(text)

    def test_non_string_rejected(self):
        assert not DecimalIntegerValidator().is_valid(12)

    def test_iter_errors(self):
        errors = list(DecimalIntegerValidator().iter_errors(""))
        assert errors


# =============================================================================
# CONFIG DOCUMENT
# =============================================================================


class TestArithmeticConfigContract:
    """Документ конфигурации порогов."""

    def test_empty_document_is_valid(self):
        validate_arithmetic_config({})

    def test_full_document(self):
        validate_arithmetic_config(
            {
                "brute_mul_threshold": 64,
                "brute_div_threshold": 32,
                "max_float_transform_length": 1 << 20,
                "max_modular_transform_length": 1 << 23,
            }
        )

    def test_below_minimum(self):
        with pytest.raises(ValidationError):
            validate_arithmetic_config({"brute_mul_threshold": 0})

    def test_above_modular_limit(self):
        assert not ArithmeticConfigValidator().is_valid(
            {"max_modular_transform_length": 1 << 24}
        )

    def test_above_float_limit(self):
        assert not ArithmeticConfigValidator().is_valid({"max_float_transform_length": 1 << 21})
        assert ArithmeticConfigValidator().is_valid({"max_float_transform_length": 1 << 20})

    def test_boolean_is_not_integer(self):
        assert not ArithmeticConfigValidator().is_valid({"brute_div_threshold": True})
