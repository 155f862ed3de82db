"""Host entrypoints for the checkout functions.

Each function has two forms: ``execute_*`` works on an already validated
input schema and returns the result schema (used by the HTTP routes), and
``run_*`` takes the raw input document and returns the result document as
plain JSON-ready data (used by the command-line runner and by hosts calling
in-process).
"""

from collections.abc import Mapping

import structlog

from customizations.api.schemas import (
    DeliveryCustomizationInput,
    DeliveryCustomizationResult,
    ShippingDiscountInput,
    ShippingDiscountResult,
)
from customizations.delivery.rewriter import rewrite
from customizations.delivery.rules import parse_substitution_config
from customizations.discount.evaluator import evaluate
from customizations.discount.tiers import parse_tier_config
from customizations.shared.errors import ConfigurationError

logger = structlog.get_logger(__name__)


def execute_delivery_customization(run_input: DeliveryCustomizationInput) -> DeliveryCustomizationResult:
    try:
        rules = parse_substitution_config(run_input.configuration)
    except ConfigurationError as exc:
        logger.warning("Rejected delivery customization configuration", errors=exc.messages)
        raise

    operations = rewrite(run_input.cart.to_snapshot(), rules)
    return DeliveryCustomizationResult.from_operations(operations)


def execute_shipping_discount(run_input: ShippingDiscountInput) -> ShippingDiscountResult:
    try:
        tiers = parse_tier_config(run_input.configuration)
    except ConfigurationError as exc:
        logger.warning("Rejected shipping discount configuration", errors=exc.messages)
        raise

    discount = evaluate(run_input.cart.to_snapshot(), tiers)
    return ShippingDiscountResult.from_discount(discount)


def run_delivery_customization(payload: Mapping) -> dict:
    """Rewrite delivery option titles for a raw ``RunInput`` document."""
    run_input = DeliveryCustomizationInput.model_validate(payload)
    return execute_delivery_customization(run_input).model_dump(by_alias=True, exclude_none=True)


def run_shipping_discount(payload: Mapping) -> dict:
    """Evaluate the shipping discount for a raw ``RunInput`` document."""
    run_input = ShippingDiscountInput.model_validate(payload)
    return execute_shipping_discount(run_input).model_dump(by_alias=True, exclude_none=True)


FUNCTIONS = {
    "delivery-customization": run_delivery_customization,
    "shipping-discount": run_shipping_discount,
}
