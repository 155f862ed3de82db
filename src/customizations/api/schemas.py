"""Pydantic schemas for the checkout runtime's function input and result documents.

These are external contracts (anti-corruption layer). The runtime hands a
function a ``RunInput`` document shaped by the function's input query and
expects a ``FunctionRunResult`` back; both use camelCase keys. The schemas
convert to and from the domain's snapshot, operations and discounts.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from customizations.cart.snapshot import CartLine, CartSnapshot, DeliveryGroup, DeliveryOption, MoneyAmount
from customizations.delivery.rewriter import RenameOperation
from customizations.discount.discount import Discount, DiscountValue
from customizations.shared.amounts import ZERO


class HostSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# RunInput
# ---------------------------------------------------------------------------
class MoneySchema(HostSchema):
    amount: Decimal = ZERO


class MerchandiseSchema(HostSchema):
    sku: str | None = None


class CartLineSchema(HostSchema):
    merchandise: MerchandiseSchema | None = None


class DeliveryAddressSchema(HostSchema):
    country_code: str | None = None


class DeliveryOptionSchema(HostSchema):
    handle: str
    title: str | None = None
    cost: MoneySchema | None = None

    def to_option(self) -> DeliveryOption:
        cost = MoneyAmount(amount=self.cost.amount) if self.cost is not None else None
        return DeliveryOption(handle=self.handle, title=self.title, cost=cost)


class DeliveryGroupSchema(HostSchema):
    delivery_address: DeliveryAddressSchema | None = None
    delivery_options: list[DeliveryOptionSchema] = []
    selected_delivery_option: DeliveryOptionSchema | None = None


class CartCostSchema(HostSchema):
    subtotal_amount: MoneySchema | None = None


class CartSchema(HostSchema):
    lines: list[CartLineSchema] = []
    delivery_groups: list[DeliveryGroupSchema] = []
    cost: CartCostSchema | None = None

    def to_snapshot(self) -> CartSnapshot:
        subtotal = self.cost.subtotal_amount if self.cost is not None else None
        return CartSnapshot(
            lines=tuple(
                CartLine(sku=line.merchandise.sku if line.merchandise is not None else None) for line in self.lines
            ),
            delivery_groups=tuple(
                DeliveryGroup(
                    country_code=group.delivery_address.country_code if group.delivery_address is not None else None,
                    delivery_options=tuple(option.to_option() for option in group.delivery_options),
                    selected_delivery_option=(
                        group.selected_delivery_option.to_option()
                        if group.selected_delivery_option is not None
                        else None
                    ),
                )
                for group in self.delivery_groups
            ),
            subtotal_amount=subtotal.amount if subtotal is not None else ZERO,
        )


class MetafieldSchema(HostSchema):
    value: str | dict | None = None


class MetafieldOwnerSchema(HostSchema):
    metafield: MetafieldSchema | None = None

    @property
    def configuration(self) -> str | dict | None:
        return self.metafield.value if self.metafield is not None else None


class DeliveryCustomizationInput(HostSchema):
    cart: CartSchema
    delivery_customization: MetafieldOwnerSchema | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "cart": {
                        "lines": [{"merchandise": {"sku": "PERSONALISE_MUG_01"}}],
                        "deliveryGroups": [
                            {
                                "deliveryAddress": {"countryCode": "CA"},
                                "deliveryOptions": [{"handle": "express", "title": "Express Shipping"}],
                            }
                        ],
                    },
                    "deliveryCustomization": {
                        "metafield": {
                            "value": '{"countryCode": "[\\"CA\\"]", "message": "[{\\"titleSeg\\": \\"Express\\", '
                            '\\"currentVal\\": \\"Shipping\\", \\"newVal\\": \\"Delivery\\"}]"}'
                        }
                    },
                }
            ]
        }
    }

    @property
    def configuration(self) -> str | dict | None:
        if self.delivery_customization is None:
            return None
        return self.delivery_customization.configuration


class ShippingDiscountInput(HostSchema):
    cart: CartSchema
    discount_node: MetafieldOwnerSchema | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "cart": {
                        "cost": {"subtotalAmount": {"amount": "500.0"}},
                        "deliveryGroups": [
                            {
                                "selectedDeliveryOption": {"handle": "standard", "cost": {"amount": "10.0"}},
                                "deliveryOptions": [{"handle": "standard", "cost": {"amount": "10.0"}}],
                            }
                        ],
                    },
                    "discountNode": {
                        "metafield": {
                            "value": '{"shippingPrice": "10", "minAmount": "0", "maxAmount": "1000", '
                            '"percentage": "0.5"}'
                        }
                    },
                }
            ]
        }
    }

    @property
    def configuration(self) -> str | dict | None:
        if self.discount_node is None:
            return None
        return self.discount_node.configuration


# ---------------------------------------------------------------------------
# FunctionRunResult
# ---------------------------------------------------------------------------
class RenameSchema(HostSchema):
    delivery_option_handle: str
    title: str


class OperationSchema(HostSchema):
    rename: RenameSchema


class DeliveryCustomizationResult(HostSchema):
    operations: list[OperationSchema]

    @classmethod
    def from_operations(cls, operations: list[RenameOperation]) -> "DeliveryCustomizationResult":
        return cls(
            operations=[
                OperationSchema(
                    rename=RenameSchema(
                        delivery_option_handle=operation.delivery_option_handle,
                        title=operation.title,
                    )
                )
                for operation in operations
            ]
        )


class FixedAmountSchema(HostSchema):
    amount: str


class PercentageSchema(HostSchema):
    value: str


class DiscountValueSchema(HostSchema):
    fixed_amount: FixedAmountSchema | None = None
    percentage: PercentageSchema | None = None

    @classmethod
    def from_value(cls, value: DiscountValue) -> "DiscountValueSchema":
        if value.is_percentage:
            return cls(percentage=PercentageSchema(value=value.amount))
        return cls(fixed_amount=FixedAmountSchema(amount=value.amount))


class DeliveryOptionTargetSchema(HostSchema):
    handle: str


class TargetSchema(HostSchema):
    delivery_option: DeliveryOptionTargetSchema


class DiscountSchema(HostSchema):
    value: DiscountValueSchema
    targets: list[TargetSchema]


class ShippingDiscountResult(HostSchema):
    discounts: list[DiscountSchema]

    @classmethod
    def from_discount(cls, discount: Discount) -> "ShippingDiscountResult":
        return cls(
            discounts=[
                DiscountSchema(
                    value=DiscountValueSchema.from_value(discount.value),
                    targets=[
                        TargetSchema(delivery_option=DeliveryOptionTargetSchema(handle=handle))
                        for handle in discount.target_handles
                    ],
                )
            ]
        )
