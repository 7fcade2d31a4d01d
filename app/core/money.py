from decimal import Decimal, ROUND_HALF_UP

# amounts are stored in paise (1/100 rupee)
PAISE_PER_RUPEE = Decimal("100")

def q2(v) -> Decimal:
    return Decimal(v).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

def q4(v) -> Decimal:
    return Decimal(v).quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)

def paise_to_rupees(paise) -> Decimal:
    return q2(Decimal(str(paise or 0)) / PAISE_PER_RUPEE)

def format_rupees(paise) -> str:
    """₹ string for a paise amount, e.g. 200 -> '₹2.00'."""
    return f"₹{paise_to_rupees(paise):.2f}"
