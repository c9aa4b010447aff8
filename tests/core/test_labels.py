"""Tests for label normalization and scalar coercion."""

import numpy as np
import pytest

from mpsge_runspec.core import global_var, scalar_value, strip_index_name
from mpsge_runspec.source.simple import Parameter


class TestStripIndexName:
    """Tests for strip_index_name."""

    def test_plain_name_unchanged(self):
        assert strip_index_name("PX") == "PX"

    def test_single_index(self):
        assert strip_index_name("Y[ag]") == "ag"

    def test_multi_index_joined_with_underscores(self):
        assert strip_index_name("X[a,b]") == "a_b"

    def test_spaces_after_commas_kept(self):
        assert strip_index_name("PL[urban, skilled]") == "urban_ skilled"
        assert strip_index_name("X[a, b]") == "a_ b"

    def test_idempotent(self):
        once = strip_index_name("X[a,b]")
        assert strip_index_name(once) == once

    def test_reversed_brackets_fall_back_to_identity(self):
        assert strip_index_name("X]a[") == "X]a["

    def test_unclosed_bracket_falls_back_to_identity(self):
        assert strip_index_name("X[a") == "X[a"

    def test_first_open_and_last_close_used(self):
        assert strip_index_name("X[a][b]") == "a][b"

    def test_non_string_names(self):
        assert strip_index_name(42) == "42"


class TestScalarValue:
    """Tests for scalar_value."""

    def test_int_and_float(self):
        assert scalar_value(3) == 3.0
        assert isinstance(scalar_value(3), float)
        assert scalar_value(2.5) == 2.5

    def test_numpy_scalar(self):
        assert scalar_value(np.float32(1.5)) == 1.5
        assert scalar_value(np.int64(7)) == 7.0

    def test_value_method(self):
        assert scalar_value(Parameter("sigma", 0.75)) == 0.75

    def test_value_attribute(self):
        class Wrapped:
            value = 4

        assert scalar_value(Wrapped()) == 4.0

    def test_unsupported_type_raises_type_error(self):
        with pytest.raises(TypeError):
            scalar_value(object())

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            scalar_value(True)


def test_global_var_keys():
    assert global_var("x", "ag") == "x_ag"
    assert global_var("l", "ag-subsist", "urban-skil") == "l_ag-subsist_urban-skil"
    assert global_var("y") == "y"
