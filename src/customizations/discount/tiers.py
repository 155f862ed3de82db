"""Shipping discount tiers and parsing of the tier table configuration.

A tier applies when the shipping price of the selected delivery option equals
the tier's ``shipping_price`` and the cart subtotal lies within
``[min_amount, max_amount]``. The discount is then the shipping price minus
``percentage`` percent of the subtotal, or free shipping when that would be
negative.

The admin form stores the table as four comma-joined columns
(``{"shippingPrice": "10, 20", "minAmount": "0, 0", ...}``). The record form
``{"tiers": [{"shippingPrice": ..., ...}]}`` is accepted too. Both become a
tuple of ``DiscountTier`` value objects here; nothing downstream sees the
columns.
"""

from collections.abc import Mapping
from decimal import Decimal

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from customizations.discount.discount import DiscountValue
from customizations.domain import customizations
from customizations.shared.amounts import HUNDRED, MAX_AMOUNT, ZERO, to_decimal
from customizations.shared.configuration import decode_list, load_configuration
from customizations.shared.errors import ConfigurationError


# Configuration key -> value object field
TIER_FIELDS = {
    "shippingPrice": "shipping_price",
    "minAmount": "min_amount",
    "maxAmount": "max_amount",
    "percentage": "percentage",
}


@customizations.value_object
class DiscountTier:
    """One band of the shipping discount table.

    Amounts are stored as the decimal strings they were configured with and
    compared as ``Decimal``.
    """

    shipping_price: String(required=True, max_length=32)
    min_amount: String(required=True, max_length=32)
    max_amount: String(required=True, max_length=32)
    percentage: String(required=True, max_length=32)

    @invariant.post
    def amounts_must_be_decimal(self):
        for field in TIER_FIELDS.values():
            value = getattr(self, field)
            if value is None:
                continue
            try:
                to_decimal(value)
            except ValueError:
                raise ValidationError({field: [f"Not a decimal amount: {value}"]}) from None

    def matches(self, shipping_price: Decimal, cart_amount: Decimal) -> bool:
        """Both subtotal bounds are inclusive."""
        return (
            to_decimal(self.shipping_price) == shipping_price
            and to_decimal(self.min_amount) <= cart_amount <= to_decimal(self.max_amount)
        )

    def discount_for(self, shipping_price: Decimal, cart_amount: Decimal) -> DiscountValue:
        discount_amount = shipping_price - cart_amount * to_decimal(self.percentage) / HUNDRED
        if discount_amount < ZERO:
            return DiscountValue.free_shipping()
        return DiscountValue.fixed_amount(discount_amount)


def parse_tier_config(raw) -> tuple[DiscountTier, ...]:
    """Turn a shipping discount configuration blob into ordered tiers.

    Absent or empty configuration yields no tiers. Anything else that cannot
    be read as tiers raises ``ConfigurationError``.
    """
    document = load_configuration(raw)
    if not document:
        return ()

    if "tiers" in document:
        entries = decode_list(document["tiers"], "tiers")
    elif any(key in document for key in TIER_FIELDS):
        entries = _zip_columns(document)
    else:
        raise ConfigurationError(
            {"configuration": [f"Expected either 'tiers' or the {', '.join(TIER_FIELDS)} settings"]}
        )

    return tuple(_build_tier(index, entry) for index, entry in enumerate(entries))


def _build_tier(index: int, entry) -> DiscountTier:
    if not isinstance(entry, Mapping):
        raise ConfigurationError({f"tiers[{index}]": ["Tier must be an object"]})

    unknown = sorted(set(entry) - set(TIER_FIELDS))
    if unknown:
        raise ConfigurationError({f"tiers[{index}]": [f"Unknown settings: {', '.join(unknown)}"]})

    errors = {}
    values = {}
    for key, field in TIER_FIELDS.items():
        try:
            number = to_decimal(entry.get(key))
        except ValueError:
            errors[f"tiers[{index}].{key}"] = [f"Not a decimal amount: {entry.get(key)!r}"]
            continue

        if abs(number) >= MAX_AMOUNT:
            errors[f"tiers[{index}].{key}"] = [f"Amount must be below {MAX_AMOUNT}"]
            continue
        values[field] = str(number)

    if errors:
        raise ConfigurationError(errors)

    try:
        return DiscountTier(**values)
    except ValidationError as exc:
        raise ConfigurationError(
            {f"tiers[{index}].{field}": messages for field, messages in exc.messages.items()}
        ) from exc


def _zip_columns(document: Mapping) -> list[dict]:
    columns = {key: _split_column(document.get(key), key) for key in TIER_FIELDS}

    lengths = {key: len(column) for key, column in columns.items()}
    if len(set(lengths.values())) > 1:
        detail = ", ".join(f"{key}={length}" for key, length in lengths.items())
        raise ConfigurationError({"configuration": [f"Tier columns have mismatched lengths: {detail}"]})

    return [dict(zip(columns, row)) for row in zip(*columns.values())]


def _split_column(value, key: str) -> list:
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return [value]
    if isinstance(value, str) and not value.lstrip().startswith("["):
        return [part.strip() for part in value.split(",")] if value.strip() else []
    return decode_list(value, key)
