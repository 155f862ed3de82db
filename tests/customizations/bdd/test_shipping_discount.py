"""BDD tests for shipping discount tiers."""

from customizations.cart.snapshot import CartSnapshot
from customizations.discount.discount import DiscountKind
from customizations.discount.evaluator import evaluate
from customizations.discount.tiers import parse_tier_config
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/shipping_discount.feature")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a cart with subtotal "{subtotal}" and selected shipping "{shipping}"'), target_fixture="cart")
def cart_with_shipping(subtotal, shipping):
    return CartSnapshot.model_validate(
        {
            "subtotalAmount": subtotal,
            "deliveryGroups": [
                {
                    "deliveryOptions": [
                        {"handle": "standard", "cost": {"amount": shipping}},
                        {"handle": "express", "cost": {"amount": "25.00"}},
                    ],
                    "selectedDeliveryOption": {"handle": "standard", "cost": {"amount": shipping}},
                }
            ],
        }
    )


@given(parsers.cfparse('a tier for shipping "{shipping}" between "{low}" and "{high}" at "{percentage}" percent'))
def discount_tier(tiers, shipping, low, high, percentage):
    tiers.append({"shippingPrice": shipping, "minAmount": low, "maxAmount": high, "percentage": percentage})


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the shipping discount is evaluated", target_fixture="discount")
def evaluate_discount(cart, tiers):
    return evaluate(cart, parse_tier_config({"tiers": tiers}))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the discount is a fixed amount of "{amount}"'))
def fixed_amount_discount(discount, amount):
    assert discount.value.kind == DiscountKind.FIXED_AMOUNT.value
    assert discount.value.amount == amount


@then(parsers.cfparse('the discount is a percentage of "{value}"'))
def percentage_discount(discount, value):
    assert discount.value.kind == DiscountKind.PERCENTAGE.value
    assert discount.value.amount == value


@then("the discount targets every delivery option")
def targets_every_option(discount):
    assert discount.target_handles == ["standard", "express"]
