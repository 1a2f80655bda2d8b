"""
Unit tests for exponentially weighted moving statistics.
"""

import math

import pytest

from sentinel.core.exceptions import InvalidArgumentError
from sentinel.stats.smoothing import ewm_std, ewma, is_defined

EWMA_REFERENCE = [
    0.09999999999999978,
    0.6554455445544544,
    1.214520977649978,
    1.7772255876832508,
    2.3435583786886025,
    2.9135180706168184,
    3.48710309969332,
    4.064311618855566,
    4.645141498269393,
    5.121538107701817,
]

EWM_STD_REFERENCE = [
    4.9526750297502914e-09,
    0.5527160659008843,
    0.902537317532201,
    1.2357653238068602,
    1.5629953497356235,
    1.8872927402148911,
    2.209889422762198,
    2.531374353771067,
    2.8520607676954124,
    3.0195071357543375,
]


class TestEwma:
    """Test the bias-corrected exponentially weighted moving average."""

    def test_reference_sequence(self, calibration_series):
        assert ewma(calibration_series, 50) == EWMA_REFERENCE

    def test_empty_series(self):
        assert ewma([], 50) == []

    def test_constant_series_is_unbiased(self):
        result = ewma([4.0] * 5, 10)
        assert result == pytest.approx([4.0] * 5)

    def test_zero_com_tracks_series(self):
        assert ewma([1.0, 5.0, 2.0], 0) == [1.0, 5.0, 2.0]

    def test_negative_com_rejected(self):
        with pytest.raises(InvalidArgumentError):
            ewma([1.0, 2.0], -1)

    def test_undefined_values_forward_fill(self):
        result = ewma([math.nan, 1.0, math.inf, 2.0], 1)

        assert result[0] is None
        assert result[1] == 1.0
        assert result[2] == pytest.approx(0.5 / 0.75)
        assert result[3] == pytest.approx(1.25 / 0.875)

    def test_undefined_values_never_leak(self):
        result = ewma([1.0, math.nan, -math.inf, 3.0, math.nan], 5)
        assert all(is_defined(value) for value in result)

    def test_all_undefined(self):
        assert ewma([math.nan, math.nan], 5) == [None, None]


class TestEwmStd:
    """Test the exponentially weighted moving standard deviation."""

    def test_reference_sequence(self, calibration_series):
        assert ewm_std(calibration_series, 50) == EWM_STD_REFERENCE

    def test_leading_undefined_is_none(self):
        result = ewm_std([math.nan, 1.0, 2.0, 3.0], 50)

        assert result[0] is None
        assert all(value is not None and value >= 0.0 for value in result[2:])

    def test_zero_com_rejected(self):
        with pytest.raises(InvalidArgumentError):
            ewm_std([1.0, 2.0], 0)

    def test_same_length_as_input(self, calibration_series):
        assert len(ewm_std(calibration_series, 5)) == len(calibration_series)
