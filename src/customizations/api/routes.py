"""FastAPI routes exposing the checkout functions over HTTP."""

from fastapi import APIRouter

from customizations.api.functions import execute_delivery_customization, execute_shipping_discount
from customizations.api.schemas import (
    DeliveryCustomizationInput,
    DeliveryCustomizationResult,
    ShippingDiscountInput,
    ShippingDiscountResult,
)

# ---------------------------------------------------------------------------
# Function Router
# ---------------------------------------------------------------------------
function_router = APIRouter(prefix="/functions", tags=["functions"])


@function_router.post(
    "/delivery-customization/run",
    response_model=DeliveryCustomizationResult,
    response_model_exclude_none=True,
)
async def run_delivery_customization(body: DeliveryCustomizationInput) -> DeliveryCustomizationResult:
    """Rename delivery options according to the attached substitution rules."""
    return execute_delivery_customization(body)


@function_router.post(
    "/shipping-discount/run",
    response_model=ShippingDiscountResult,
    response_model_exclude_none=True,
)
async def run_shipping_discount(body: ShippingDiscountInput) -> ShippingDiscountResult:
    """Price the shipping discount according to the attached tier table."""
    return execute_shipping_discount(body)
