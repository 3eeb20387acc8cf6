"""The lookup entry point used by hosts.

``lookup_key`` is called once per key. Configuration problems raise; anything
that merely means "Vault has no value for this key" is reported through
``context.not_found()`` and a ``None`` return value.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from hiera_vault.config.models import LookupOptionsModel
from hiera_vault.config.validator import validate_options
from hiera_vault.errors import ConfigurationError, VaultLookupError, tagged
from hiera_vault.store import HvacSecretStore, SecretStore

from .confine import is_key_allowed
from .context import LookupContext, explain
from .extractor import NOT_FOUND, extract_value
from .fetcher import fetch_secret
from .token import Skip, resolve_token

logger = logging.getLogger(__name__)

StoreFactory = Callable[[LookupOptionsModel, str], SecretStore]


def _not_found(context: LookupContext) -> None:
    context.not_found()
    return None


def lookup_key(
    key: str,
    options: Mapping[str, Any] | None,
    context: LookupContext,
    store_factory: StoreFactory | None = None,
) -> Any:
    """Look up a key in Vault.

    Args:
        key: The lookup key, appended to every mount prefix
        options: The raw option bag (see LookupOptionsModel)
        context: The host's lookup context
        store_factory: Builds the store from options and token; defaults to
                       an hvac backed store

    Returns:
        The value for key, or None after signalling not-found

    Raises:
        InvalidArgumentError: If the options are invalid or no token is set
        VaultLookupError: If a confine pattern is invalid, Vault is sealed or
                          unreachable
    """
    opts = validate_options(options)

    resolution = resolve_token(opts.token)
    if isinstance(resolution, Skip):
        explain(context, resolution.reason)
        return _not_found(context)

    if context.cache_has_key(key):
        return context.cached_value(key)

    if not is_key_allowed(key, opts.confine_to_keys):
        explain(
            context,
            tagged(f"Skipping hiera_vault backend because key '{key}' does not match confine_to_keys"),
        )
        return _not_found(context)

    store = (store_factory or HvacSecretStore.from_options)(opts, resolution.token)

    try:
        record = fetch_secret(store, key, opts.mounts, context)
    except ConfigurationError as e:
        raise VaultLookupError(tagged(f"Skipping backend. Configuration error: {e}")) from e

    if record is None:
        explain(context, tagged(f"Could not find secret for key {key}"))
        return _not_found(context)

    value = extract_value(record, opts)
    if value is NOT_FOUND:
        explain(context, tagged(f"Secret {key} has no field '{opts.default_field}'"))
        return _not_found(context)

    return context.cache(key, context.interpolate(value))
