"""Delivery title rewriter: renames delivery options for personalised carts.

Every delivery option in a group with a known destination country gets
exactly one rename operation. For carts without personalised merchandise the
rename carries the title unchanged. The host applies renames as-is, so
leaving an option out is not the same as keeping its title.
"""

from collections.abc import Iterable, Sequence

import structlog
from pydantic import BaseModel, ConfigDict

from customizations.cart.snapshot import CartSnapshot
from customizations.delivery.rules import SubstitutionRule

logger = structlog.get_logger(__name__)

PERSONALISATION_MARKER = "PERSONALISE_"


class RenameOperation(BaseModel):
    model_config = ConfigDict(frozen=True)

    delivery_option_handle: str
    title: str


def is_personalised(skus: Iterable[str]) -> bool:
    return any(PERSONALISATION_MARKER in sku for sku in skus)


def rewrite(cart: CartSnapshot, rules: Sequence[SubstitutionRule]) -> list[RenameOperation]:
    """Produce one rename operation per delivery option in groups with a country code.

    When the cart is personalised, rules are applied in order and
    cumulatively: each matching rule sees the title as left by the previous
    one.
    """
    personalised = is_personalised(cart.skus())

    operations = []
    for group in cart.delivery_groups:
        if not group.country_code:
            continue

        for option in group.delivery_options:
            title = option.title or ""
            if personalised:
                for rule in rules:
                    if rule.applies_to(group.country_code, title):
                        title = rule.apply(title)

            operations.append(RenameOperation(delivery_option_handle=option.handle, title=title))

    logger.debug(
        "Delivery titles rewritten",
        personalised=personalised,
        rule_count=len(rules),
        operation_count=len(operations),
    )
    return operations
