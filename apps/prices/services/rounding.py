from decimal import Decimal, ROUND_HALF_UP

TWO_PLACES = Decimal('0.01')


def round2(value) -> Decimal:
    """Round a money amount or percentage to 2 decimal places."""
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def percentage(part, whole) -> Decimal:
    """part / whole * 100 rounded to 2 dp; 0.00 when whole is zero."""
    if not whole:
        return Decimal('0.00')
    return round2(Decimal(part) * 100 / Decimal(whole))
