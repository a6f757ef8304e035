from __future__ import annotations

from decimal import Decimal, InvalidOperation
import math

import numpy as np


# Powers of ten checked from coarse to fine when picking a rounding granularity.
_ROUND_TO_BOUNDS = tuple(10.0**exp for exp in range(10, -11, -1))


def round_to_for_delta(delta: float) -> float:
    """Rounding granularity for a range spanning `delta`: one decade below its magnitude.

    Returns 0.0 when no rounding applies (zero, negative, non-finite or tiny deltas).
    """
    if not math.isfinite(delta) or delta <= 0:
        return 0.0
    for bound in _ROUND_TO_BOUNDS:
        if delta >= bound:
            return bound / 10.0
    return 0.0


def round_down(value: float, round_to: float) -> float:
    if round_to <= 0 or not math.isfinite(value):
        return value
    return min(value, _snap(value, round_to, math.floor))


def round_up(value: float, round_to: float) -> float:
    if round_to <= 0 or not math.isfinite(value):
        return value
    return max(value, _snap(value, round_to, math.ceil))


def _snap(value: float, round_to: float, fn) -> float:
    if round_to >= 1.0:
        return float(fn(value / round_to) * round_to)
    # Multiply by the integral inverse so 0.3 -> 30 -> 0.3 stays exact.
    inverse = round(1.0 / round_to)
    return float(fn(value * inverse) / inverse)


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    lo, hi = min(vmin, vmax), max(vmin, vmax)
    span = _nice_number(hi - lo, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    tick_min = np.floor(lo / step) * step
    tick_max = np.ceil(hi / step) * step

    ticks = np.arange(tick_min, tick_max + 0.5 * step, step, dtype=np.float64)
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    eps = step * 1e-6
    return ticks[(ticks >= lo - eps) & (ticks <= hi + eps)]


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim trailing zeros for fractional values (preserve integer zeros like 30, 40).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
