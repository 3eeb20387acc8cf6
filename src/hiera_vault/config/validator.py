"""Validation of the raw option bag.

All checks happen here, once, before any token is resolved or any request is
sent. Downstream code only ever sees a ``LookupOptionsModel``.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from hiera_vault.errors import InvalidArgumentError, VaultLookupError, tagged

from .models import DEFAULT_FIELD_BEHAVIOR_VALUES, DEFAULT_FIELD_PARSE_VALUES, LookupOptionsModel

logger = logging.getLogger(__name__)


def _check_choice(options: Mapping[str, Any], name: str, allowed: tuple[str, ...]) -> None:
    value = options.get(name)
    if value is not None and value not in allowed:
        choices = ",".join(f"'{choice}'" for choice in allowed)
        raise InvalidArgumentError(
            tagged(f"invalid value for {name}: '{value}', should be one of {choices}")
        )


def compile_confine_patterns(patterns: Any) -> tuple[re.Pattern[str], ...]:
    """Compile the ``confine_to_keys`` allow-list.

    Every pattern is compiled before reporting, so a single error lists all
    the broken expressions.

    Raises:
        InvalidArgumentError: If patterns is not a list
        VaultLookupError: If one or more patterns fail to compile
    """
    if patterns is None:
        return ()
    if not isinstance(patterns, (list, tuple)):
        raise InvalidArgumentError(tagged("confine_to_keys must be an array"))

    compiled = []
    failures = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except (re.error, TypeError) as e:
            failures.append(f"{e}: /{pattern}/")

    if failures:
        raise VaultLookupError(tagged(f"creating regexp failed with: {'; '.join(failures)}"))
    return tuple(compiled)


def validate_options(options: Mapping[str, Any] | None) -> LookupOptionsModel:
    """Validate and normalize a lookup option bag.

    Args:
        options: The raw options as handed over by the host. Unknown keys
                 are ignored; keys set to None fall back to their defaults.

    Returns:
        The normalized options

    Raises:
        InvalidArgumentError: If an option has an invalid value or type
        VaultLookupError: If a confine_to_keys pattern is not a valid regex
    """
    options = dict(options or {})

    _check_choice(options, "default_field_parse", DEFAULT_FIELD_PARSE_VALUES)
    _check_choice(options, "default_field_behavior", DEFAULT_FIELD_BEHAVIOR_VALUES)
    options["confine_to_keys"] = compile_confine_patterns(options.get("confine_to_keys"))

    try:
        model = LookupOptionsModel.model_validate(
            {name: value for name, value in options.items() if value is not None}
        )
    except ValidationError as e:
        raise InvalidArgumentError(tagged(f"invalid options: {e}")) from e

    logger.debug(
        f"Validated options: mounts={model.mounts}, default_field={model.default_field}, "
        f"confined={len(model.confine_to_keys)}"
    )
    return model
