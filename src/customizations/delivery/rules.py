"""Substitution rules for delivery option titles and parsing of their configuration.

A merchant authors a list of per-country rules in the admin. Each rule says:
for delivery groups shipping to ``country_code``, when an option title
contains ``title_segment``, replace the first ``current_value`` in it with
``new_value``.

Two configuration shapes are accepted:

* record form ``{"rules": [{"countryCode", "titleSegment", "currentValue", "newValue"}]}``
* the admin form's parallel form ``{"countryCode": "[...]", "message": "[...]"}``
  where both values are JSON-encoded lists and ``message`` entries use the
  short keys ``titleSeg`` / ``currentVal`` / ``newVal``

Either way the result is a tuple of ``SubstitutionRule`` records, validated
once here so the rewriter never indexes into mismatched lists.
"""

from collections.abc import Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaError

from customizations.shared.configuration import decode_list, load_configuration
from customizations.shared.errors import ConfigurationError


class SubstitutionRule(BaseModel):
    """One country-scoped text substitution for delivery option titles."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    country_code: str = Field(
        validation_alias=AliasChoices("countryCode", "country_code"),
    )
    title_segment: str = Field(
        default="",
        validation_alias=AliasChoices("titleSegment", "titleSeg", "title_segment"),
    )
    current_value: str = Field(
        validation_alias=AliasChoices("currentValue", "currentVal", "current_value"),
    )
    new_value: str = Field(
        default="",
        validation_alias=AliasChoices("newValue", "newVal", "new_value"),
    )

    def applies_to(self, country_code: str, title: str) -> bool:
        """An empty title segment matches every title in the country.

        A rule without a country code never applies.
        """
        return bool(self.country_code) and self.country_code == country_code and self.title_segment in title

    def apply(self, title: str) -> str:
        """Replace the first occurrence of ``current_value`` in ``title``.

        An empty ``current_value`` matches at the start, so ``new_value`` is
        prepended.
        """
        return title.replace(self.current_value, self.new_value, 1)


def parse_substitution_config(raw) -> tuple[SubstitutionRule, ...]:
    """Turn a delivery customization configuration blob into ordered rules.

    Absent or empty configuration yields no rules. Anything else that cannot
    be read as rules raises ``ConfigurationError``.
    """
    document = load_configuration(raw)
    if not document:
        return ()

    if "rules" in document:
        entries = decode_list(document["rules"], "rules")
    elif "countryCode" in document or "message" in document:
        entries = _zip_parallel_lists(document)
    else:
        raise ConfigurationError(
            {"configuration": ["Expected either 'rules' or 'countryCode' and 'message' settings"]}
        )

    rules = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise ConfigurationError({f"rules[{index}]": ["Rule must be an object"]})
        if _is_blank(entry):
            continue
        try:
            rules.append(SubstitutionRule.model_validate(entry))
        except SchemaError as exc:
            raise ConfigurationError(_rule_errors(index, exc)) from exc

    return tuple(rules)


def _zip_parallel_lists(document: Mapping) -> list[dict]:
    country_codes = decode_list(document.get("countryCode"), "countryCode")
    messages = decode_list(document.get("message"), "message")

    if len(country_codes) != len(messages):
        raise ConfigurationError(
            {
                "configuration": [
                    f"countryCode has {len(country_codes)} entries but message has {len(messages)}"
                ]
            }
        )

    entries = []
    for index, (country_code, message) in enumerate(zip(country_codes, messages)):
        if not isinstance(message, Mapping):
            raise ConfigurationError({f"message[{index}]": ["Message must be an object"]})
        entries.append({**message, "countryCode": country_code})
    return entries


def _is_blank(entry: Mapping) -> bool:
    return all(value is None or (isinstance(value, str) and not value.strip()) for value in entry.values())


def _rule_errors(index: int, exc: SchemaError) -> dict:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        key = f"rules[{index}].{location}" if location else f"rules[{index}]"
        errors.setdefault(key, []).append(error["msg"])
    return errors
