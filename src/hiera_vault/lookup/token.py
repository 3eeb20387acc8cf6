"""Vault token resolution.

The token comes from, in order of precedence:

1. The ``IGNORE-VAULT`` sentinel in VAULT_TOKEN or the ``token`` option,
   which turns the lookup into an immediate not-found
2. VAULT_TOKEN, when the ``token`` option is unset
3. The first line of the file the ``token`` option points to
4. The ``token`` option itself
"""

import logging
import os
from dataclasses import dataclass
from typing import Union

from hiera_vault.errors import InvalidArgumentError, tagged

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "VAULT_TOKEN"
IGNORE_VAULT = "IGNORE-VAULT"


@dataclass(frozen=True)
class Resolved:
    """A usable token."""

    token: str

    def __repr__(self) -> str:
        return "Resolved(token=<redacted>)"


@dataclass(frozen=True)
class Skip:
    """The sentinel was set; the lookup must end as not-found."""

    reason: str


TokenResolution = Union[Resolved, Skip]


def read_token_file(path: str) -> str:
    """Return the first line of a token file without trailing whitespace."""
    try:
        with open(path, encoding="utf-8") as f:
            return f.readline().rstrip()
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidArgumentError(tagged(f"could not read token from file {path}: {e}")) from e


def _is_readable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.R_OK)


def resolve_token(option_token: str | None) -> TokenResolution:
    """Work out which token a lookup should use.

    Args:
        option_token: The ``token`` lookup option, if any

    Returns:
        Resolved with the token, or Skip when the sentinel is set

    Raises:
        InvalidArgumentError: If neither the option nor VAULT_TOKEN holds a token
    """
    env_token = os.environ.get(TOKEN_ENV_VAR)

    if env_token == IGNORE_VAULT or option_token == IGNORE_VAULT:
        logger.info(f"Vault token is {IGNORE_VAULT}, skipping lookup")
        return Skip(tagged(f"token set to {IGNORE_VAULT} - Quitting early"))

    if not option_token:
        if not env_token:
            raise InvalidArgumentError(
                tagged(f"no token set in options and no token in {TOKEN_ENV_VAR}")
            )
        return Resolved(env_token)

    if _is_readable_file(option_token):
        logger.debug(f"Reading Vault token from file {option_token}")
        return Resolved(read_token_file(option_token))

    return Resolved(option_token)
