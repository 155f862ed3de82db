"""Shipping discount value objects: the result of evaluating discount tiers."""

from decimal import Decimal
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import List, String, ValueObject

from customizations.domain import customizations
from customizations.shared.amounts import HUNDRED, ZERO, format_amount, to_decimal


class DiscountKind(Enum):
    FIXED_AMOUNT = "FixedAmount"
    PERCENTAGE = "Percentage"


@customizations.value_object
class DiscountValue:
    """How much is taken off shipping: a fixed amount or a percentage.

    Fixed amounts are kept with exactly two fractional digits. Percentages
    are capped at 100, which means free shipping.
    """

    kind: String(required=True, choices=DiscountKind)
    amount: String(required=True, max_length=32)

    @classmethod
    def fixed_amount(cls, amount: Decimal) -> "DiscountValue":
        return cls(kind=DiscountKind.FIXED_AMOUNT.value, amount=format_amount(amount))

    @classmethod
    def percentage(cls, value: Decimal) -> "DiscountValue":
        return cls(kind=DiscountKind.PERCENTAGE.value, amount=str(value))

    @classmethod
    def nothing(cls) -> "DiscountValue":
        return cls.fixed_amount(ZERO)

    @classmethod
    def free_shipping(cls) -> "DiscountValue":
        return cls.percentage(HUNDRED)

    @property
    def is_percentage(self) -> bool:
        return self.kind == DiscountKind.PERCENTAGE.value

    @invariant.post
    def amount_must_suit_kind(self):
        if self.amount is None:
            return

        try:
            amount = to_decimal(self.amount)
        except ValueError:
            raise ValidationError({"amount": [f"Not a decimal amount: {self.amount}"]}) from None

        if amount < ZERO:
            raise ValidationError({"amount": ["Discount cannot be negative"]})
        if self.is_percentage and amount > HUNDRED:
            raise ValidationError({"amount": ["Percentage discount cannot exceed 100"]})


@customizations.value_object
class Discount:
    """A single discount applied uniformly to the listed delivery options."""

    value: ValueObject(DiscountValue, required=True)
    targets: List(content_type=String)

    @property
    def target_handles(self) -> list[str]:
        return list(self.targets or [])
