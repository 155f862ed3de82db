"""Shipping discount evaluator. Picks a tier and prices the shipping discount."""

from collections.abc import Sequence

import structlog

from customizations.cart.snapshot import CartSnapshot
from customizations.discount.discount import Discount, DiscountValue
from customizations.discount.tiers import DiscountTier

logger = structlog.get_logger(__name__)


def evaluate(cart: CartSnapshot, tiers: Sequence[DiscountTier]) -> Discount:
    """Compute the single shipping discount for ``cart``.

    Tiers are checked in configured order and every match overwrites the
    result, so when several tiers match the last one wins. Without a match
    the discount is a fixed amount of zero. Either way the discount targets
    every delivery option of every group.
    """
    cart_amount = cart.subtotal_amount
    shipping_price = cart.current_shipping_price()

    value = DiscountValue.nothing()
    matched_index = None
    for index, tier in enumerate(tiers):
        if tier.matches(shipping_price, cart_amount):
            value = tier.discount_for(shipping_price, cart_amount)
            matched_index = index

    discount = Discount(value=value, targets=cart.delivery_option_handles())

    logger.debug(
        "Shipping discount evaluated",
        cart_amount=str(cart_amount),
        shipping_price=str(shipping_price),
        tier_count=len(tiers),
        matched_tier=matched_index,
        kind=value.kind,
        amount=value.amount,
    )
    return discount
