"""Tests for the delivery customization host entrypoint over RunInput documents."""

import json

import pytest
from customizations.api.functions import run_delivery_customization
from customizations.shared.errors import ConfigurationError
from pydantic import ValidationError as SchemaError

CA_EXPRESS_CONFIG = json.dumps(
    {
        "countryCode": json.dumps(["CA"]),
        "message": json.dumps([{"titleSeg": "Express", "currentVal": "Shipping", "newVal": "Delivery"}]),
    }
)


def _run_input(skus=("PERSONALISE_MUG_01",), configuration=CA_EXPRESS_CONFIG, groups=None):
    if groups is None:
        groups = [
            {
                "deliveryAddress": {"countryCode": "CA"},
                "deliveryOptions": [
                    {"handle": "ca-express", "title": "Express Shipping"},
                    {"handle": "ca-standard", "title": "Standard Shipping"},
                ],
            },
            {
                "deliveryAddress": {"countryCode": "US"},
                "deliveryOptions": [{"handle": "us-express", "title": "Express Shipping"}],
            },
        ]
    payload = {
        "cart": {
            "lines": [{"merchandise": {"sku": sku}} for sku in skus],
            "deliveryGroups": groups,
        },
    }
    if configuration is not None:
        payload["deliveryCustomization"] = {"metafield": {"value": configuration}}
    return payload


class TestRunDeliveryCustomization:
    def test_personalised_cart_renames_matching_option(self):
        result = run_delivery_customization(_run_input())
        assert result == {
            "operations": [
                {"rename": {"deliveryOptionHandle": "ca-express", "title": "Express Delivery"}},
                {"rename": {"deliveryOptionHandle": "ca-standard", "title": "Standard Shipping"}},
                {"rename": {"deliveryOptionHandle": "us-express", "title": "Express Shipping"}},
            ]
        }

    def test_standard_cart_gets_identity_renames(self):
        result = run_delivery_customization(_run_input(skus=("MUG_01",)))
        titles = [operation["rename"]["title"] for operation in result["operations"]]
        assert titles == ["Express Shipping", "Standard Shipping", "Express Shipping"]

    def test_record_form_configuration(self):
        configuration = json.dumps(
            {"rules": [{"countryCode": "US", "titleSegment": "Express", "currentValue": "Express", "newValue": "Fast"}]}
        )
        result = run_delivery_customization(_run_input(configuration=configuration))
        assert result["operations"][2]["rename"]["title"] == "Fast Shipping"

    def test_missing_configuration_means_no_rules(self):
        result = run_delivery_customization(_run_input(configuration=None))
        assert len(result["operations"]) == 3
        assert result["operations"][0]["rename"]["title"] == "Express Shipping"

    def test_missing_metafield_means_no_rules(self):
        payload = _run_input(configuration=None)
        payload["deliveryCustomization"] = {"metafield": None}
        result = run_delivery_customization(payload)
        assert len(result["operations"]) == 3

    def test_group_without_address_is_skipped(self):
        groups = [
            {"deliveryOptions": [{"handle": "no-address", "title": "Express Shipping"}]},
            {"deliveryAddress": {"countryCode": None}, "deliveryOptions": [{"handle": "no-code", "title": "Pickup"}]},
        ]
        assert run_delivery_customization(_run_input(groups=groups)) == {"operations": []}

    def test_merchandise_without_sku_is_not_personalised(self):
        payload = _run_input()
        payload["cart"]["lines"] = [{"merchandise": {}}, {}]
        result = run_delivery_customization(payload)
        assert result["operations"][0]["rename"]["title"] == "Express Shipping"

    def test_partly_filled_rows_do_not_fail_standard_carts(self):
        configuration = json.dumps(
            {
                "countryCode": json.dumps(["CA", ""]),
                "message": json.dumps(
                    [
                        {"titleSeg": "Express", "currentVal": "Shipping", "newVal": "Delivery"},
                        {"titleSeg": "Express", "currentVal": "Shipping", "newVal": "Post"},
                    ]
                ),
            }
        )
        result = run_delivery_customization(_run_input(skus=("PLAIN",), configuration=configuration))
        titles = [operation["rename"]["title"] for operation in result["operations"]]
        assert titles == ["Express Shipping", "Standard Shipping", "Express Shipping"]

    def test_rule_without_country_is_ignored_for_personalised_carts(self):
        configuration = json.dumps(
            {
                "countryCode": json.dumps([""]),
                "message": json.dumps([{"titleSeg": "Express", "currentVal": "Shipping", "newVal": "Post"}]),
            }
        )
        result = run_delivery_customization(_run_input(configuration=configuration))
        titles = [operation["rename"]["title"] for operation in result["operations"]]
        assert titles == ["Express Shipping", "Standard Shipping", "Express Shipping"]

    def test_empty_current_value_prepends_new_value(self):
        configuration = json.dumps(
            {
                "countryCode": json.dumps(["CA"]),
                "message": json.dumps([{"titleSeg": "Express", "currentVal": "", "newVal": "Fast "}]),
            }
        )
        result = run_delivery_customization(_run_input(skus=("PERSONALISE_1",), configuration=configuration))
        assert result["operations"][0]["rename"]["title"] == "Fast Express Shipping"

    def test_malformed_configuration_is_fatal(self):
        with pytest.raises(ConfigurationError):
            run_delivery_customization(_run_input(configuration='{"countryCode": "[\\"CA\\"]", "message": "[]"}'))

    def test_malformed_input_is_rejected(self):
        with pytest.raises(SchemaError):
            run_delivery_customization({"cart": {"deliveryGroups": [{"deliveryOptions": [{"title": "No handle"}]}]}})
