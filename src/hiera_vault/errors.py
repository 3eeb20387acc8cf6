"""Exception hierarchy for hiera-vault.

Every hard failure carries the ``[hiera-vault]`` tag in its message so that it
can be told apart from other backends in the host's error output.
"""

TAG = "[hiera-vault]"


def tagged(message: str) -> str:
    """Prefix a message with the component tag."""
    return f"{TAG} {message}"


class HieraVaultError(Exception):
    """Base class for all hiera-vault errors."""


class InvalidArgumentError(HieraVaultError, ValueError):
    """Malformed lookup options, or no token could be found anywhere.

    Raised before any network access and never retried.
    """


class VaultLookupError(HieraVaultError, LookupError):
    """A lookup could not be completed because of the environment.

    Covers regex compile failures, connection failures and configuration
    errors discovered only by contacting Vault.
    """


class ConfigurationError(HieraVaultError):
    """Vault is reachable but cannot serve secrets (e.g. it is sealed)."""
