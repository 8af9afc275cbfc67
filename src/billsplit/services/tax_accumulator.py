"""Tax accumulation over a bill subtotal"""
import math
from typing import Sequence
from loguru import logger

from ..models.entities import Tax, TaxBreakdown, TaxKind


def non_negative(value: float, label: str) -> float:
    """Clamp a negative or non-finite amount to zero so a summary can still be shown."""
    value = float(value)
    if not math.isfinite(value) or value < 0:
        logger.warning(f"Invalid amount {value!r} for {label}. Treating it as 0.00.")
        return 0.0
    return value


def tax_contribution(tax: Tax, subtotal: float) -> float:
    """Amount a single tax adds to the bill."""
    value = non_negative(tax.value, f"tax '{tax.name}'")
    if tax.kind == TaxKind.PERCENTAGE:
        return value / 100 * subtotal
    return value


def fixed_tax_total(taxes: Sequence[Tax]) -> float:
    """Sum of the fixed taxes; percentage taxes are ignored."""
    return sum(
        non_negative(tax.value, f"tax '{tax.name}'")
        for tax in taxes
        if tax.kind == TaxKind.FIXED
    )


def compute_taxes(subtotal: float, taxes: Sequence[Tax]) -> TaxBreakdown:
    """
    Compute every tax's contribution for the given subtotal

    Args:
        subtotal: Sum of all dish prices
        taxes: Taxes applied to the bill

    Returns:
        TaxBreakdown with the amount per tax id and the total tax
    """
    per_tax = {tax.id: tax_contribution(tax, subtotal) for tax in taxes}
    return TaxBreakdown(per_tax=per_tax, total=sum(per_tax.values()))
