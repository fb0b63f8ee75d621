from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

ZERO = Decimal("0")


def parse_decimal(value: object) -> Decimal:
    """Parse a fixed-point value sent as text or number. Anything unparsable is zero."""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    text = str(value).strip().replace(",", "")
    if not text:
        return ZERO
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return ZERO
    return parsed if parsed.is_finite() else ZERO


def round_half_up(value: float | Decimal) -> int:
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
