"""Pure numeric helpers: large-number display and geometric bulk pricing."""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

# Largest threshold first so the first match wins.
_SUFFIXES: tuple[tuple[float, str], ...] = (
    (1e33, "Dc"),
    (1e30, "No"),
    (1e27, "Oc"),
    (1e24, "Sp"),
    (1e21, "Sx"),
    (1e18, "Qi"),
    (1e15, "Qa"),
    (1e12, "T"),
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
)

INFINITY_SYMBOL = "∞"

# Enough significant digits to write any finite float out in full.
_FIXED_PRECISION = 400


def format_number(n: float, digits: int = 2) -> str:
    """Render ``n`` with a magnitude suffix, e.g. ``1.50K`` or ``2.00M``.

    Values below one thousand are printed with ``digits`` decimals, or with none
    once they reach 100. Exact ties round away from zero. Non-finite input renders
    as the infinity symbol.
    """
    if not math.isfinite(n):
        return INFINITY_SYMBOL
    magnitude = abs(n)
    for threshold, suffix in _SUFFIXES:
        if magnitude >= threshold:
            return _to_fixed(n / threshold, digits) + suffix
    decimals = 0 if magnitude >= 100 else digits
    return _to_fixed(n, decimals)


def _to_fixed(value: float, digits: int) -> str:
    # Decimal(float) is exact, so only true binary ties round up.
    with localcontext() as ctx:
        ctx.prec = _FIXED_PRECISION
        quantized = Decimal(value).quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)
    return format(quantized, "f")


def bulk_cost(base: float, growth: float, current_level: int, qty: int) -> float:
    """Return the price of ``qty`` consecutive levels starting at ``current_level``.

    Level ``n`` costs ``base * growth ** n``; the sum is taken in closed form.
    """
    if qty <= 0:
        return 0.0
    first = base * growth**current_level
    if growth == 1:
        return first * qty
    return first * (growth**qty - 1) / (growth - 1)


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` into ``[lo, hi]``."""
    return max(lo, min(hi, value))
