"""Command-line runner for the checkout functions.

Reads a function input document from stdin (or ``--input``), runs the named
function and writes the result document to stdout, the same contract the
checkout runtime uses when it invokes a function.

Usage:
    python src/run_function.py delivery-customization < input.json
    python src/run_function.py shipping-discount --input input.json
"""

import argparse
import json
import sys

from pydantic import ValidationError as SchemaError

from customizations.api.functions import FUNCTIONS
from customizations.domain import customizations
from customizations.shared.errors import ConfigurationError
from customizations.utils.logging import add_context, clear_context, configure_logging, get_logger

logger = get_logger(__name__)


def execute(function_name, source, out, err) -> int:
    """Run ``function_name`` over the JSON document in ``source``.

    Returns the process exit status: 0 on success, 1 when the input document
    or the attached configuration is rejected.
    """
    add_context(function=function_name)
    try:
        try:
            payload = json.load(source)
            result = FUNCTIONS[function_name](payload)
        except json.JSONDecodeError as exc:
            return _reject({"input": [f"Invalid JSON: {exc}"]}, err)
        except SchemaError as exc:
            return _reject(_input_errors(exc), err)
        except ConfigurationError as exc:
            return _reject(exc.messages, err)

        json.dump(result, out)
        out.write("\n")
        logger.debug("Function result written", function=function_name)
        return 0
    finally:
        clear_context()


def _reject(errors, err) -> int:
    logger.warning("Function input rejected", errors=errors)
    json.dump({"errors": errors}, err)
    err.write("\n")
    return 1


def _input_errors(exc: SchemaError) -> dict:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "input"
        errors.setdefault(location, []).append(error["msg"])
    return errors


def main(argv=None):
    parser = argparse.ArgumentParser(description="Checkout customizations function runner")
    parser.add_argument("function", choices=sorted(FUNCTIONS), help="Function to run")
    parser.add_argument(
        "--input",
        type=argparse.FileType("r", encoding="utf-8"),
        default=sys.stdin,
        help="Input document (default: stdin)",
    )
    args = parser.parse_args(argv)

    configure_logging(log_dir=None)
    customizations.init()

    with customizations.domain_context():
        return execute(args.function, args.input, sys.stdout, sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
