"""Types shared by secret store implementations."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, Union

SecretValue = Union[str, int, float, bool, None, list[Any], dict[str, Any]]
SecretRecord = dict[str, SecretValue]


class ReadOutcome(Enum):
    """Result kind of a single read against one mount."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    AUTH_FAILURE = "auth_failure"


@dataclass(frozen=True)
class ReadResult:
    """Outcome of reading one path.

    Attributes:
        outcome: What happened
        record: The secret data, set only when outcome is FOUND
        reason: Human readable failure reason, set only for AUTH_FAILURE
    """

    outcome: ReadOutcome
    record: SecretRecord | None = None
    reason: str | None = None

    @classmethod
    def found(cls, record: SecretRecord) -> "ReadResult":
        return cls(ReadOutcome.FOUND, record=record)

    @classmethod
    def not_found(cls) -> "ReadResult":
        return cls(ReadOutcome.NOT_FOUND)

    @classmethod
    def auth_failure(cls, reason: str) -> "ReadResult":
        return cls(ReadOutcome.AUTH_FAILURE, reason=reason)


class SecretStore(Protocol):
    """Capability the lookup needs from a secret store client.

    Implementations must be safe to call from one lookup at a time; a new
    instance is created for every lookup.
    """

    def is_sealed(self) -> bool:
        """Return True if the store cannot serve secrets right now."""
        ...

    def read(self, mount: str, key: str, backend: str) -> ReadResult:
        """Read ``key`` below the mount prefix ``mount`` of type ``backend``."""
        ...
