"""Reading a key from the configured mounts.

Mounts are tried in declaration order, backend type first and mount prefix
second. The first mount that holds the key wins, so the order in the options
is the priority order for keys present in several mounts.
"""

import logging
from collections.abc import Iterator, Mapping, Sequence

from hiera_vault.errors import ConfigurationError, tagged
from hiera_vault.store import ReadOutcome, SecretRecord, SecretStore, secret_path

from .context import LookupContext, explain

logger = logging.getLogger(__name__)


def iter_mounts(mounts: Mapping[str, Sequence[str]]) -> Iterator[tuple[str, str]]:
    """Yield (backend, mount prefix) pairs in lookup order."""
    for backend, prefixes in mounts.items():
        for prefix in prefixes:
            yield backend, prefix


def fetch_secret(
    store: SecretStore,
    key: str,
    mounts: Mapping[str, Sequence[str]],
    context: LookupContext,
) -> SecretRecord | None:
    """Return the secret stored under key in the first mount that has it.

    A mount that refuses the token is skipped like a mount without the key;
    the refusal only shows up in the explain output and the log.

    Returns:
        The secret data, or None if no mount holds the key

    Raises:
        ConfigurationError: If Vault is sealed
    """
    if store.is_sealed():
        raise ConfigurationError(tagged("vault is sealed"))

    for backend, prefix in iter_mounts(mounts):
        path = secret_path(prefix, key, backend)
        explain(context, tagged(f"Looking in path {path}"))

        result = store.read(prefix, key, backend)

        if result.outcome is ReadOutcome.FOUND:
            explain(context, tagged(f"Read secret: {key}"))
            return result.record

        if result.outcome is ReadOutcome.AUTH_FAILURE:
            explain(
                context, tagged(f"Could not read secret {path}: {result.reason}"), logging.INFO
            )

    return None
