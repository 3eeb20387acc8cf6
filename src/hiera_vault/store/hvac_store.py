"""HashiCorp Vault store backed by the hvac client.

KV version 1 style backends (``generic``, ``kv`` and any unknown type) are read
through the logical API at ``<mount>/<key>``. ``kv2`` (or ``kv-v2``) mounts go
through the KV v2 API with the mount prefix as mount point.
"""

import logging
import os
from typing import Any

import hvac
from hvac.exceptions import Forbidden, InvalidPath, Unauthorized, VaultError

from hiera_vault.config.models import LookupOptionsModel
from hiera_vault.errors import VaultLookupError, tagged

from .types import ReadResult, SecretRecord

logger = logging.getLogger(__name__)

KV2_BACKENDS = frozenset({"kv2", "kv-v2"})
DEFAULT_ADDRESS = "http://127.0.0.1:8200"


def join_path(*parts: str) -> str:
    """Join path segments with single slashes, dropping empty segments."""
    return "/".join(part.strip("/") for part in parts if part and part.strip("/"))


def secret_path(mount: str, key: str, backend: str) -> str:
    """Return the Vault API path a read of key below mount goes to."""
    if backend in KV2_BACKENDS:
        return join_path(mount, "data", key)
    return join_path(mount, key)


def _failure_reason(error: VaultError) -> str:
    errors = getattr(error, "errors", None)
    if errors:
        if isinstance(errors, (list, tuple)):
            return "\n".join(str(e) for e in errors).rstrip()
        return str(errors).rstrip()
    return str(error).rstrip()


def _unwrap_kv2(path: str, data: dict[str, Any]) -> SecretRecord:
    # A logical read of "<mount>/data/<key>" on a KV v2 mount returns the
    # secret nested under data, next to its metadata. Other paths are KV v1.
    if (
        "/data/" in f"/{path}/"
        and set(data) == {"data", "metadata"}
        and isinstance(data["data"], dict)
    ):
        return data["data"]
    return data


class HvacSecretStore:
    """SecretStore implementation over ``hvac.Client``.

    Example:
        >>> store = HvacSecretStore.from_options(options, token="s.abc")
        >>> store.read("puppet", "test_key", "kv")
        ReadResult(outcome=<ReadOutcome.FOUND: 'found'>, record={'value': 'default'}, reason=None)
    """

    def __init__(self, client: hvac.Client):
        self._client = client

    @classmethod
    def from_options(cls, options: LookupOptionsModel, token: str) -> "HvacSecretStore":
        """Build a store from validated lookup options and a resolved token."""
        address = options.address or os.environ.get("VAULT_ADDR") or DEFAULT_ADDRESS

        verify: bool | str = options.ssl_verify
        if options.ssl_verify and options.ssl_ca_cert:
            verify = options.ssl_ca_cert

        logger.debug(f"Connecting to Vault at {address} (verify={verify})")
        client = hvac.Client(
            url=address,
            token=token,
            verify=verify,
            cert=options.ssl_pem_file,
            timeout=options.timeout,
        )
        return cls(client)

    def is_sealed(self) -> bool:
        try:
            return bool(self._client.sys.is_sealed())
        except (VaultError, OSError) as e:
            raise VaultLookupError(tagged(f"could not query seal status: {e}")) from e

    def read(self, mount: str, key: str, backend: str) -> ReadResult:
        try:
            if backend in KV2_BACKENDS:
                return self._read_kv2(mount, key)
            return self._read_logical(join_path(mount, key))
        except (Forbidden, Unauthorized) as e:
            return ReadResult.auth_failure(_failure_reason(e))
        except VaultError as e:
            raise VaultLookupError(
                tagged(f"could not read secret {secret_path(mount, key, backend)}: {_failure_reason(e)}")
            ) from e
        except OSError as e:
            raise VaultLookupError(tagged(f"could not connect to Vault: {e}")) from e

    def _read_logical(self, path: str) -> ReadResult:
        response = self._client.read(path)
        if not response or response.get("data") is None:
            return ReadResult.not_found()
        return ReadResult.found(_unwrap_kv2(path, response["data"]))

    def _read_kv2(self, mount: str, key: str) -> ReadResult:
        try:
            response = self._client.secrets.kv.v2.read_secret_version(
                path=key.strip("/"),
                mount_point=mount.strip("/"),
                raise_on_deleted_version=False,
            )
        except InvalidPath:
            return ReadResult.not_found()
        data = (response or {}).get("data") or {}
        if data.get("data") is None:
            return ReadResult.not_found()
        return ReadResult.found(data["data"])
