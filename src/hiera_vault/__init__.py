"""hiera-vault - look up hiera keys in HashiCorp Vault.

The package resolves one lookup key at a time against the KV mounts of a Vault
server and turns the secret found there into a hiera value.

## Quick Example

```python
from hiera_vault import SimpleLookupContext, lookup_key

options = {
    "address": "https://vault.example.com:8200",
    "token": "/etc/puppetlabs/vault-token",
    "mounts": {"kv": ["puppet/common", "puppet/nodes"]},
    "default_field": "value",
}

value = lookup_key("profile::db::password", options, SimpleLookupContext())
```
"""

from .errors import ConfigurationError, HieraVaultError, InvalidArgumentError, VaultLookupError
from .lookup.context import LookupContext, SimpleLookupContext
from .lookup.orchestrator import lookup_key
from .version import PACKAGE_NAME, PACKAGE_VERSION

__all__ = [
    "lookup_key",
    "LookupContext",
    "SimpleLookupContext",
    "HieraVaultError",
    "InvalidArgumentError",
    "VaultLookupError",
    "ConfigurationError",
    "PACKAGE_NAME",
    "PACKAGE_VERSION",
]
