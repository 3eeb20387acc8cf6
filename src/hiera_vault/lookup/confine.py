"""Key confinement: only keys matching the allow-list go to Vault."""

import re
from collections.abc import Sequence


def is_key_allowed(key: str, patterns: Sequence[re.Pattern[str]]) -> bool:
    """Return True if key may be looked up.

    An empty pattern list allows every key. Otherwise one pattern has to
    match somewhere in the key; patterns are not anchored implicitly.
    """
    if not patterns:
        return True
    return any(pattern.search(key) for pattern in patterns)
