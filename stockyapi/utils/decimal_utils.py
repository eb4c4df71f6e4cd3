from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[Decimal, int, float, str]

SHARE_PLACES = 6
MONEY_PLACES = 2


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # float goes through str() so 0.1 stays 0.1
    return Decimal(str(value))


def round_half_away(value: Number, places: int) -> Decimal:
    """Round half away from zero to a fixed number of decimal places."""
    exponent = Decimal(1).scaleb(-places)
    return to_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)


def round_shares(value: Number) -> Decimal:
    return round_half_away(value, SHARE_PLACES)


def round_money(value: Number) -> Decimal:
    return round_half_away(value, MONEY_PLACES)
