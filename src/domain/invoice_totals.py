"""Invoice totals calculator

Pure computation of subtotal, discount, tax and total from line items.
Every derived field is rounded half-up to 2 decimals exactly once.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Sequence
from libs.result import Result, Return, Error
from src.domain.invoice import DiscountType
from src.domain.money import ZERO, Number, round2, to_decimal

MIN_QUANTITY = Decimal("0.01")
MAX_QUANTITY = Decimal("999999")
MAX_UNIT_PRICE = Decimal("99999999")
MAX_DESCRIPTION_LENGTH = 500

# Inputs are stored at scale 2, so they are accepted only at scale 2
PRECISION_MESSAGE = "At most 2 decimal places are allowed"


@dataclass(frozen=True)
class LineItem:
    description: str
    quantity: Decimal
    unit_price: Decimal

    @property
    def total(self) -> Decimal:
        return round2(to_decimal(self.quantity) * to_decimal(self.unit_price))


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total: Decimal


def _is_cents(value: Decimal) -> bool:
    return value == round2(value)


def _validate(
    items: Sequence[LineItem],
    tax_rate: Decimal,
    discount_type: Optional[DiscountType],
    discount_value: Optional[Decimal],
) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}

    def add(field: str, message: str) -> None:
        errors.setdefault(field, []).append(message)

    if not items:
        add("items", "At least one item is required")

    for index, item in enumerate(items):
        if not item.description or not item.description.strip():
            add(f"items.{index}.description", "Description is required")
        elif len(item.description) > MAX_DESCRIPTION_LENGTH:
            add(f"items.{index}.description", f"Description exceeds {MAX_DESCRIPTION_LENGTH} characters")
        quantity = to_decimal(item.quantity)
        if quantity < MIN_QUANTITY:
            add(f"items.{index}.quantity", f"Quantity must be at least {MIN_QUANTITY}")
        elif quantity > MAX_QUANTITY:
            add(f"items.{index}.quantity", f"Quantity must not exceed {MAX_QUANTITY}")
        elif not _is_cents(quantity):
            add(f"items.{index}.quantity", PRECISION_MESSAGE)
        unit_price = to_decimal(item.unit_price)
        if unit_price < 0:
            add(f"items.{index}.unit_price", "Unit price must not be negative")
        elif unit_price > MAX_UNIT_PRICE:
            add(f"items.{index}.unit_price", f"Unit price must not exceed {MAX_UNIT_PRICE}")
        elif not _is_cents(unit_price):
            add(f"items.{index}.unit_price", PRECISION_MESSAGE)

    if tax_rate < 0 or tax_rate > 100:
        add("tax_rate", "Tax rate must be between 0 and 100")
    elif not _is_cents(tax_rate):
        add("tax_rate", PRECISION_MESSAGE)

    if discount_type is not None:
        if discount_value is None:
            add("discount_value", "Discount value is required when a discount type is set")
        elif discount_value < 0:
            add("discount_value", "Discount value must not be negative")
        elif discount_type == DiscountType.PERCENTAGE and discount_value > 100:
            add("discount_value", "Percentage discount must not exceed 100")
        elif not _is_cents(discount_value):
            add("discount_value", PRECISION_MESSAGE)

    return errors


def compute_totals(
    items: Sequence[LineItem],
    tax_rate: Number,
    discount_type: Optional[DiscountType] = None,
    discount_value: Optional[Number] = None,
) -> Result[InvoiceTotals]:
    """
    Compute invoice totals

    Args:
        items: Line items (description, quantity, unit_price)
        tax_rate: Tax percentage, 0-100
        discount_type: PERCENTAGE, FIXED or None
        discount_value: Percentage or fixed amount, ignored without a type

    Returns:
        Result[InvoiceTotals]: totals, or VALIDATION_ERROR with field details
    """
    rate = to_decimal(tax_rate)
    value = to_decimal(discount_value) if discount_value is not None else None

    errors = _validate(items, rate, discount_type, value)
    if errors:
        return Return.err(
            Error(
                code="VALIDATION_ERROR",
                message="Invalid invoice items or rates",
                details=errors,
            )
        )

    subtotal = round2(sum((to_decimal(i.quantity) * to_decimal(i.unit_price) for i in items), ZERO))

    if discount_type == DiscountType.PERCENTAGE:
        discount_amount = min(round2(subtotal * value / 100), subtotal)
    elif discount_type == DiscountType.FIXED:
        discount_amount = min(round2(value), subtotal)
    else:
        discount_amount = ZERO

    taxable = subtotal - discount_amount
    tax_amount = round2(taxable * rate / 100)
    total = round2(taxable + tax_amount)

    return Return.ok(
        InvoiceTotals(
            subtotal=subtotal,
            discount_amount=discount_amount,
            tax_amount=tax_amount,
            total=total,
        )
    )
