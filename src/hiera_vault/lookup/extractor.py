"""Turning a secret into the value returned to the host.

``default_field`` selects one field of the secret:

================  =============  ======================================
default_field     field present  result
================  =============  ======================================
unset             -              the whole secret
set, ``ignore``   no             the whole secret
set, ``only``     no             not found
set, any          yes            the field, parsed per default_field_parse
================  =============  ======================================
"""

import json
import logging
from typing import Any, Final

from hiera_vault.config.models import LookupOptionsModel
from hiera_vault.store import SecretRecord, SecretValue

logger = logging.getLogger(__name__)


class _NotFound:
    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


# Distinct from None, which is a legitimate field value
NOT_FOUND: Final = _NotFound()


def parse_field(value: SecretValue, parse: str) -> Any:
    """Interpret a field value; malformed JSON falls back to the raw value."""
    if parse != "json" or not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except (ValueError, RecursionError):
        logger.debug("default_field is not valid JSON, returning it as a string")
        return value


def extract_value(record: SecretRecord, options: LookupOptionsModel) -> Any:
    """Apply the default_field rules to a secret.

    Returns:
        The value for the host, or NOT_FOUND
    """
    field = options.default_field
    if field is None:
        return record

    if field not in record:
        if options.default_field_behavior == "only":
            return NOT_FOUND
        return record

    return parse_field(record[field], options.default_field_parse)
