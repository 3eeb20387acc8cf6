"""The lookup pipeline: token, confinement, fetching and field extraction."""

from .confine import is_key_allowed
from .context import LookupContext, SimpleLookupContext
from .extractor import NOT_FOUND, extract_value, parse_field
from .fetcher import fetch_secret, iter_mounts
from .orchestrator import lookup_key
from .token import IGNORE_VAULT, Resolved, Skip, resolve_token

__all__ = [
    "IGNORE_VAULT",
    "NOT_FOUND",
    "LookupContext",
    "Resolved",
    "SimpleLookupContext",
    "Skip",
    "extract_value",
    "fetch_secret",
    "is_key_allowed",
    "iter_mounts",
    "lookup_key",
    "parse_field",
    "resolve_token",
]
