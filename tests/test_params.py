"""Tests for wren.routing.params: path and query value conversion."""

from typing import Any

import pytest

from wren.routing.params import convert_param, is_scalar


class TestConvertParam:
    def test_int(self) -> None:
        assert convert_param("42", int) == 42

    def test_negative_int(self) -> None:
        assert convert_param("-3", int) == -3

    def test_int_rejects_text(self) -> None:
        with pytest.raises(ValueError):
            convert_param("abc", int)

    @pytest.mark.parametrize("raw", ["4_2", " 42", "42 ", "+42", "\u0664\u0662", ""])
    def test_int_rejects_loose_literals(self, raw: str) -> None:
        with pytest.raises(ValueError):
            convert_param(raw, int)

    def test_float(self) -> None:
        assert convert_param("1.5", float) == 1.5

    @pytest.mark.parametrize("raw", ["1_0.5", " 1.5", "nan", "inf", "+1.5"])
    def test_float_rejects_loose_literals(self, raw: str) -> None:
        with pytest.raises(ValueError):
            convert_param(raw, float)

    def test_float_accepts_exponent(self) -> None:
        assert convert_param("-2.5e3", float) == -2500.0

    def test_str_passthrough(self) -> None:
        assert convert_param("hello", str) == "hello"

    def test_any_stays_string(self) -> None:
        assert convert_param("42", Any) == "42"

    @pytest.mark.parametrize("raw", ["true", "True", "1", "yes", "on"])
    def test_bool_true(self, raw: str) -> None:
        assert convert_param(raw, bool) is True

    @pytest.mark.parametrize("raw", ["false", "0", "no", "OFF"])
    def test_bool_false(self, raw: str) -> None:
        assert convert_param(raw, bool) is False

    def test_bool_rejects_other(self) -> None:
        with pytest.raises(ValueError):
            convert_param("maybe", bool)

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError):
            convert_param("x", list)


class TestIsScalar:
    def test_scalars(self) -> None:
        assert all(is_scalar(t) for t in (str, int, float, bool))

    def test_non_scalars(self) -> None:
        assert not is_scalar(list)
        assert not is_scalar(dict)
