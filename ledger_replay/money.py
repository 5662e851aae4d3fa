"""Fixed-point money helpers.

Amounts are ``Decimal`` values quantized to four decimal places. Rounding
happens once, when an amount enters the system. Balance arithmetic runs in
``LEDGER_CONTEXT``, which traps any rounding instead of silently dropping
digits.
"""

from decimal import (
    ROUND_HALF_UP,
    Context,
    Decimal,
    Inexact,
    InvalidOperation,
    Overflow,
    Rounded,
)

SCALE = Decimal("0.0001")
ZERO = Decimal("0.0000")

# 15 integer digits plus 4 decimals per amount
MAX_AMOUNT = Decimal("999999999999999.9999")

LEDGER_CONTEXT = Context(
    prec=38,
    rounding=ROUND_HALF_UP,
    traps=[InvalidOperation, Overflow, Inexact, Rounded],
)
_FORMAT_CONTEXT = Context(prec=LEDGER_CONTEXT.prec, rounding=ROUND_HALF_UP)


def to_amount(value: Decimal | int | str) -> Decimal:
    """Quantize a value to the ledger's fixed-point scale.

    Parameters
    ----------
    value : Decimal | int | str
        Amount to convert. Floats are rejected so binary rounding errors
        never reach the ledger.

    Returns
    -------
    Decimal
        Amount rounded half-up to four decimal places.

    Raises
    ------
    ValueError
        If the value is a float, not a number, not finite, or larger in
        magnitude than ``MAX_AMOUNT``.
    """
    if isinstance(value, float):
        raise ValueError("Amounts must not be floats, pass a Decimal or string")
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    if abs(amount) > MAX_AMOUNT:
        raise ValueError(f"Amount exceeds {MAX_AMOUNT}: {value!r}")
    try:
        return amount.quantize(SCALE, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e


def format_amount(amount: Decimal) -> str:
    """Render an amount with exactly four decimal places."""
    return str(amount.quantize(SCALE, rounding=ROUND_HALF_UP, context=_FORMAT_CONTEXT))
