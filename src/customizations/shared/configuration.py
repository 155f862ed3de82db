"""Loading of opaque JSON configuration blobs attached to checkout functions."""

import json
from collections.abc import Mapping
from decimal import Decimal

from customizations.shared.errors import ConfigurationError


def load_configuration(raw) -> dict:
    """Decode a configuration blob into a dict.

    ``raw`` is the metafield value as stored (a JSON string) or an already
    decoded mapping. ``None``, blank strings and JSON ``null`` all mean "no
    configuration" and yield an empty dict. Floats are decoded as ``Decimal``
    so amounts keep their written precision.
    """
    if raw is None:
        return {}

    if isinstance(raw, (str, bytes, bytearray)):
        if not raw.strip():
            return {}
        try:
            document = json.loads(raw, parse_float=Decimal)
        except json.JSONDecodeError as exc:
            raise ConfigurationError({"configuration": [f"Configuration is not valid JSON: {exc.msg}"]}) from exc
    else:
        document = raw

    if document is None:
        return {}
    if not isinstance(document, Mapping):
        raise ConfigurationError({"configuration": ["Configuration must be a JSON object"]})
    return dict(document)


def decode_list(value, field: str) -> list:
    """Return ``value`` as a list, decoding it first if it is a JSON-encoded string.

    The admin forms store list-valued settings as JSON strings nested inside
    the configuration document; an empty string stands for an empty list.
    """
    if value is None or value == "":
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value, parse_float=Decimal)
        except json.JSONDecodeError as exc:
            raise ConfigurationError({field: [f"Value is not valid JSON: {exc.msg}"]}) from exc
    if not isinstance(value, list):
        raise ConfigurationError({field: ["Value must be a list"]})
    return value
