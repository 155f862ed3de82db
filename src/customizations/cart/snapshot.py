"""Cart snapshot: the read-only view of a checkout handed to the functions.

The snapshot is built by the host once per evaluation and discarded
afterwards. Models are frozen and accept the host's camelCase field names as
well as their snake_case equivalents.
"""

from collections.abc import Iterator
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from customizations.shared.amounts import ZERO


class SnapshotModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class MoneyAmount(SnapshotModel):
    amount: Decimal = ZERO


class DeliveryOption(SnapshotModel):
    handle: str
    title: str | None = None
    cost: MoneyAmount | None = None

    @property
    def price(self) -> Decimal:
        return self.cost.amount if self.cost is not None else ZERO


class DeliveryGroup(SnapshotModel):
    country_code: str | None = None
    delivery_options: tuple[DeliveryOption, ...] = ()
    selected_delivery_option: DeliveryOption | None = None


class CartLine(SnapshotModel):
    sku: str | None = None


class CartSnapshot(SnapshotModel):
    lines: tuple[CartLine, ...] = ()
    delivery_groups: tuple[DeliveryGroup, ...] = ()
    subtotal_amount: Decimal = ZERO

    def skus(self) -> Iterator[str]:
        """Yield the SKUs of all lines that carry one."""
        for line in self.lines:
            if line.sku:
                yield line.sku

    def delivery_option_handles(self) -> list[str]:
        """Handles of every delivery option, in group then option order."""
        return [option.handle for group in self.delivery_groups for option in group.delivery_options]

    def current_shipping_price(self) -> Decimal:
        """Cost of the option selected in the first delivery group, or zero."""
        if not self.delivery_groups:
            return ZERO
        selected = self.delivery_groups[0].selected_delivery_option
        return selected.price if selected is not None else ZERO
