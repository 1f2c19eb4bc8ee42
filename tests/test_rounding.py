import pytest
from recipemark.core.errors import InvalidArgument
from recipemark.utils.rounding import round_half_up, round_satisfying

SAMPLES = [1.23, 3.11, 4.92, 998, 2 / 3, 123.4, 9876, 0.123, 0.067, 118.295, 176.67]


@pytest.mark.parametrize("x, expected", [
    (1.23, 1.25),
    (3.11, 3.1),
    (4.92, 4.9),
    (998, 1000),
    (2 / 3, 0.67),
    (123.4, 125),
    (9876, 9900),
    (0.123, 0.12),
    (0.067, 0.07),
    (118.295, 120),
    (176.67, 175),
])
def test_known_values(x, expected):
    assert round_satisfying(x) == pytest.approx(expected)


@pytest.mark.parametrize("x, tolerance, expected", [
    (1.23456, 0.1, 1.2),
    (1.23, 0.1, 1.2),
    (1.23, 0.01, 1.23),
])
def test_custom_tolerance(x, tolerance, expected):
    assert round_satisfying(x, tolerance) == pytest.approx(expected)


def test_whole_results_are_integers():
    result = round_satisfying(998)
    assert result == 1000
    assert isinstance(result, int)
    assert isinstance(round_satisfying(118.295), int)


def test_zero_short_circuits():
    assert round_satisfying(0) == 0


@pytest.mark.parametrize("x", SAMPLES)
def test_result_within_tolerance(x):
    result = round_satisfying(x, 0.05)
    assert x * 0.95 <= result <= x * 1.05


@pytest.mark.parametrize("x", SAMPLES)
def test_idempotent(x):
    once = round_satisfying(x)
    assert round_satisfying(once) == once


@pytest.mark.parametrize("tolerance", [0, 1, -0.1, 1.5])
def test_rejects_tolerance_out_of_range(tolerance):
    with pytest.raises(InvalidArgument):
        round_satisfying(1.0, tolerance)


@pytest.mark.parametrize("x", [-1, -0.5, float("nan"), float("inf"), "3"])
def test_rejects_bad_values(x):
    with pytest.raises(InvalidArgument):
        round_satisfying(x)


@pytest.mark.parametrize("value, precision, expected", [
    (2.675, 2, 2.68),
    (0.125, 2, 0.13),
    (1.25, 1, 1.3),
    (-1.25, 1, -1.3),
    (118.2945, 3, 118.295),
])
def test_round_half_up(value, precision, expected):
    assert round_half_up(value, precision) == expected


def test_round_half_up_handles_large_magnitudes():
    assert round_half_up(1e300, 2) == 1e300
