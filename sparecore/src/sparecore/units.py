"""
Conversion between user-facing coin amounts and integer mojos.

User input arrives as decimal strings. Conversion goes through Decimal so
that amounts like "0.1" map to exact mojo counts.
"""

from __future__ import annotations

import re
from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext

from sparecore.constants import MAX_MOJOS, MOJO_DECIMALS, MOJO_PER_COIN

_NUMERIC_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)$")


def is_numeric(value: str | None) -> bool:
    """Check that value is a plain decimal number ("1", "1.5", ".5", "-2")."""
    if value is None:
        return False
    return bool(_NUMERIC_RE.match(value.strip()))


def coin_to_mojo(value: str | int | Decimal) -> int:
    """
    Convert a coin amount to mojos.

    Digits below one mojo are truncated, never rounded.

    Raises:
        ValueError: If value is not a decimal number or is beyond a uint64
            mojo amount
    """
    if isinstance(value, str):
        if not is_numeric(value):
            raise ValueError(f"Not a numeric amount: {value!r}")
        value = value.strip()
    try:
        amount = Decimal(value)
    except InvalidOperation as e:
        raise ValueError(f"Not a numeric amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Not a numeric amount: {value!r}")

    # Precision covers every input digit so the scaling itself is exact
    with localcontext() as ctx:
        ctx.prec = len(amount.as_tuple().digits) + MOJO_DECIMALS + 1
        mojos = int(amount.scaleb(MOJO_DECIMALS).to_integral_value(rounding=ROUND_DOWN))
    if abs(mojos) > MAX_MOJOS:
        raise ValueError(f"Amount out of range: {value!r}")
    return mojos


def mojo_to_coin(mojos: int) -> Decimal:
    return Decimal(mojos) / MOJO_PER_COIN


def mojo_to_coin_string(mojos: int) -> str:
    """Render mojos as a coin amount without trailing zeros (7 -> "0.000000000007")."""
    text = f"{mojo_to_coin(mojos):.{MOJO_DECIMALS}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"
