"""Secret store clients."""

from .hvac_store import HvacSecretStore, join_path, secret_path
from .types import ReadOutcome, ReadResult, SecretRecord, SecretStore, SecretValue

__all__ = [
    "HvacSecretStore",
    "ReadOutcome",
    "ReadResult",
    "SecretRecord",
    "SecretStore",
    "SecretValue",
    "join_path",
    "secret_path",
]
