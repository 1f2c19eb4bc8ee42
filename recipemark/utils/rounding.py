import math
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import List, Tuple, Union

from recipemark.core.errors import InvalidArgument

Number = Union[int, float]

# Step sizes relative to the input's order of magnitude, most pleasing first.
SATISFYING_FACTORS: Tuple[float, ...] = (1.0, 0.5, 0.25, 0.1, 0.05)


def round_satisfying(x: Number, tolerance: float = 0.05) -> Number:
    """Round ``x`` to an aesthetically pleasing value within a relative tolerance.

    Candidates are integer multiples of ``factor * 10**floor(log10(x))`` for every
    factor in SATISFYING_FACTORS, rounded half-up to a precision derived from the
    tolerance. The candidate closest to ``x`` inside ``[x*(1-tol), x*(1+tol)]``
    wins; on equal distance the earlier candidate is kept.

    Examples: 1.23 -> 1.25, 3.11 -> 3.1, 998 -> 1000, 2/3 -> 0.67

    Raises:
        InvalidArgument: if x is negative or tolerance is not strictly between 0 and 1.
    """
    if x is None or isinstance(x, bool) or not isinstance(x, (int, float)) or math.isnan(x):
        raise InvalidArgument(f"x must be a number, got {x!r}")
    if x < 0:
        raise InvalidArgument(f"x must be >= 0, got {x}")
    if not 0.0 < tolerance < 1.0:
        raise InvalidArgument(f"tolerance must be between 0 and 1 (exclusive), got {tolerance}")
    if math.isinf(x):
        raise InvalidArgument("x must be finite")

    if x == 0:
        return 0

    precision = -math.floor(math.log10(tolerance))
    lower_bound = x * (1 - tolerance)
    upper_bound = x * (1 + tolerance)
    power = math.floor(math.log10(x))

    candidates = _collect_candidates(lower_bound, upper_bound, power, precision)
    if not candidates:
        return _as_number(round_half_up(x, precision))

    best = candidates[0]
    for candidate in candidates[1:]:
        if abs(candidate - x) < abs(best - x):
            best = candidate
    return _as_number(best)


def _collect_candidates(lower_bound: float, upper_bound: float, power: int, precision: int) -> List[float]:
    candidates: List[float] = []
    magnitude = 10.0 ** power
    for factor in SATISFYING_FACTORS:
        step = factor * magnitude
        start = math.floor(lower_bound / step)
        end = math.ceil(upper_bound / step)
        for i in range(start, end + 1):
            candidate = round_half_up(i * step, precision)
            if lower_bound <= candidate <= upper_bound and candidate not in candidates:
                candidates.append(candidate)
    return candidates


def round_half_up(value: float, precision: int) -> float:
    """Round to a number of decimals, ties away from zero on the written decimal value."""
    # repr() gives the shortest decimal that round-trips, so 0.125 stays 0.125
    decimal_value = Decimal(repr(float(value)))
    quantum = Decimal(1).scaleb(-precision)
    # The default 28-digit context cannot quantize large magnitudes
    digits = max(decimal_value.adjusted(), 0) + precision + 2
    context = Context(prec=max(digits, 28))
    return float(decimal_value.quantize(quantum, rounding=ROUND_HALF_UP, context=context))


def _as_number(value: float) -> Number:
    return int(value) if float(value).is_integer() else value
