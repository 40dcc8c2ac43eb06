from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

import numpy as np


@dataclass(frozen=True)
class AxisBounds:
    low: float
    high: float

    @property
    def range(self) -> float:
        return self.high - self.low


def compute_bounds(
    values: np.ndarray,
    *,
    low: float | None = None,
    high: float | None = None,
    reference_value: float | None = None,
    buffer_ratio: float = 0.05,
) -> AxisBounds:
    finite = values[np.isfinite(values)] if values.size else values
    if finite.size:
        vmin = float(np.min(finite))
        vmax = float(np.max(finite))
    else:
        vmin, vmax = 0.0, 1.0
    if reference_value is not None:
        vmin = min(vmin, reference_value)
        vmax = max(vmax, reference_value)
    if low is not None:
        vmin = float(low)
    if high is not None:
        vmax = float(high)

    if vmin == vmax:
        delta = max(1.0, abs(vmin) * buffer_ratio)
        vmin -= delta
        vmax += delta
    elif vmin > vmax:
        vmin, vmax = vmax, vmin
    return AxisBounds(low=vmin, high=vmax)


def nice_bounds(bounds: AxisBounds, target: int) -> tuple[AxisBounds, np.ndarray]:
    """Widen bounds to the enclosing nice ticks and return both."""
    ticks = generate_nice_ticks(bounds.low, bounds.high, target)
    return AxisBounds(low=float(ticks[0]), high=float(ticks[-1])), ticks


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    span = _nice_number(vmax - vmin, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    tick_min = np.floor(vmin / step) * step
    tick_max = np.ceil(vmax / step) * step

    ticks = np.arange(tick_min, tick_max + 0.5 * step, step, dtype=np.float64)
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def format_value(value: float, *, step: float | None = None) -> str:
    """Render a numeric label without float noise (``0.0`` -> ``0``)."""
    value = float(value)
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    if abs_v != 0 and (abs_v >= 1e9 or abs_v < 1e-6):
        return f"{value:.4e}"

    decimals = _decimals_from_step(step) if step is not None else 6
    d = Decimal(str(value))
    try:
        q = d.quantize(Decimal("1").scaleb(-decimals))
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_value(float(ticks[0]))]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_value(float(v), step=step) for v in ticks]


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
    return min(12, max(0, -int(exp)))
