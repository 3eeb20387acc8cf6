"""Pydantic models for lookup options.

This module defines the normalized form of the option bag a host passes to
every lookup. The structure mirrors the ``options`` section of a hiera
hierarchy level:

```yaml
options:
  address: "https://vault.example.com:8200"
  token: "/etc/puppetlabs/vault-token"
  mounts:
    kv:
      - puppet/common
    kv2:
      - secret
  confine_to_keys:
    - "^vault_.*"
  default_field: value
  default_field_parse: json
  default_field_behavior: only
```
"""

import re
from typing import Literal

from pydantic import Field

from hiera_vault.models import HieraVaultBaseModel

DEFAULT_FIELD_PARSE_VALUES = ("string", "json")
DEFAULT_FIELD_BEHAVIOR_VALUES = ("ignore", "only")


class LookupOptionsModel(HieraVaultBaseModel):
    """Validated lookup options.

    Attributes:
        address: Vault server address; falls back to VAULT_ADDR when unset
        token: Literal token, path to a token file, or the IGNORE-VAULT sentinel
        mounts: Backend type to ordered mount prefixes; order is lookup priority
        confine_to_keys: Compiled allow-list patterns; empty means every key
        default_field: Field to return instead of the whole secret
        default_field_parse: How to interpret the default field's value
        default_field_behavior: What to return when the default field is missing
        ssl_verify: Verify the server certificate
        ssl_ca_cert: CA bundle used to verify the server certificate
        ssl_pem_file: Client certificate (PEM, key included) for TLS auth
        timeout: Request timeout in seconds, handed to the Vault client

    Example:
        >>> options = LookupOptionsModel(
        ...     address="https://vault.example.com:8200",
        ...     mounts={"kv": ["puppet"]},
        ...     default_field="value",
        ... )
    """

    address: str | None = None
    token: str | None = None
    mounts: dict[str, list[str]] = Field(default_factory=dict)
    confine_to_keys: tuple[re.Pattern[str], ...] = ()
    default_field: str | None = None
    default_field_parse: Literal["string", "json"] = "string"
    default_field_behavior: Literal["ignore", "only"] = "ignore"
    ssl_verify: bool = True
    ssl_ca_cert: str | None = None
    ssl_pem_file: str | None = None
    timeout: int = Field(default=30, gt=0)
