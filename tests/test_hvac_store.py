"""
Tests for the hvac backed secret store.

The hvac client is mocked; these tests check how responses and hvac
exceptions are mapped to read outcomes.
"""

import os
from unittest.mock import MagicMock, patch

import pytest
from hvac.exceptions import Forbidden, InternalServerError, InvalidPath, Unauthorized, VaultDown

from hiera_vault.config import validate_options
from hiera_vault.errors import HieraVaultError, VaultLookupError
from hiera_vault.store import HvacSecretStore, ReadOutcome, join_path, secret_path


@pytest.fixture
def client():
    mock_client = MagicMock()
    mock_client.sys.is_sealed.return_value = False
    return mock_client


@pytest.fixture
def hvac_store(client):
    return HvacSecretStore(client)


class TestFromOptions:
    def test_client_configuration(self):
        options = validate_options(
            {
                "address": "https://vault.example.com:8200",
                "ssl_ca_cert": "/etc/ssl/vault-ca.pem",
                "ssl_pem_file": "/etc/ssl/puppet.pem",
                "timeout": 5,
            }
        )

        with patch("hvac.Client") as mock_hvac_client:
            HvacSecretStore.from_options(options, "s.token")

        mock_hvac_client.assert_called_with(
            url="https://vault.example.com:8200",
            token="s.token",
            verify="/etc/ssl/vault-ca.pem",
            cert="/etc/ssl/puppet.pem",
            timeout=5,
        )

    def test_ssl_verify_disabled_ignores_ca(self):
        options = validate_options({"ssl_verify": False, "ssl_ca_cert": "/etc/ssl/vault-ca.pem"})

        with patch("hvac.Client") as mock_hvac_client:
            HvacSecretStore.from_options(options, "s.token")

        assert mock_hvac_client.call_args.kwargs["verify"] is False

    def test_address_from_environment(self):
        with patch.dict(os.environ, {"VAULT_ADDR": "https://env-vault:8200"}):
            with patch("hvac.Client") as mock_hvac_client:
                HvacSecretStore.from_options(validate_options({}), "s.token")

        assert mock_hvac_client.call_args.kwargs["url"] == "https://env-vault:8200"

    def test_default_address(self):
        with patch("hvac.Client") as mock_hvac_client:
            HvacSecretStore.from_options(validate_options({}), "s.token")

        assert mock_hvac_client.call_args.kwargs["url"] == "http://127.0.0.1:8200"


class TestSealStatus:
    def test_sealed(self, hvac_store, client):
        client.sys.is_sealed.return_value = True
        assert hvac_store.is_sealed() is True

    def test_unsealed(self, hvac_store):
        assert hvac_store.is_sealed() is False

    def test_unreachable(self, hvac_store, client):
        client.sys.is_sealed.side_effect = ConnectionError("connection refused")

        with pytest.raises(VaultLookupError, match="could not query seal status"):
            hvac_store.is_sealed()


class TestLogicalRead:
    def test_found(self, hvac_store, client):
        client.read.return_value = {"data": {"value": "default"}, "lease_duration": 0}

        result = hvac_store.read("puppet", "test_key", "kv")

        assert result.outcome is ReadOutcome.FOUND
        assert result.record == {"value": "default"}
        client.read.assert_called_once_with("puppet/test_key")

    def test_not_found(self, hvac_store, client):
        client.read.return_value = None

        assert hvac_store.read("puppet", "missing", "generic").outcome is ReadOutcome.NOT_FOUND

    def test_empty_secret_is_found(self, hvac_store, client):
        client.read.return_value = {"data": {}}

        result = hvac_store.read("puppet", "empty", "kv")

        assert result.outcome is ReadOutcome.FOUND
        assert result.record == {}

    def test_kv2_envelope_is_unwrapped(self, hvac_store, client):
        client.read.return_value = {
            "data": {"data": {"a": 1}, "metadata": {"version": 3}},
        }

        result = hvac_store.read("secret/data", "test_key", "kv")

        assert result.record == {"a": 1}
        client.read.assert_called_once_with("secret/data/test_key")

    def test_kv1_secret_shaped_like_envelope(self, hvac_store, client):
        secret = {"data": {"a": 1}, "metadata": {"owner": "ops"}}
        client.read.return_value = {"data": secret}

        result = hvac_store.read("puppet", "test_key", "kv")

        assert result.record == secret

    def test_permission_denied(self, hvac_store, client):
        client.read.side_effect = Forbidden(errors=["permission denied"])

        result = hvac_store.read("puppet", "test_key", "kv")

        assert result.outcome is ReadOutcome.AUTH_FAILURE
        assert result.reason == "permission denied"

    def test_unauthorized(self, hvac_store, client):
        client.read.side_effect = Unauthorized(errors=["missing client token"])

        result = hvac_store.read("puppet", "test_key", "kv")

        assert result.outcome is ReadOutcome.AUTH_FAILURE
        assert result.reason == "missing client token"

    def test_connection_error(self, hvac_store, client):
        client.read.side_effect = ConnectionError("connection refused")

        with pytest.raises(VaultLookupError, match="could not connect to Vault"):
            hvac_store.read("puppet", "test_key", "kv")

    def test_vault_error_is_tagged(self, hvac_store, client):
        client.read.side_effect = VaultDown(errors=["Vault is sealed"])

        with pytest.raises(HieraVaultError) as exc_info:
            hvac_store.read("puppet", "test_key", "kv")

        assert isinstance(exc_info.value, VaultLookupError)
        assert str(exc_info.value) == (
            "[hiera-vault] could not read secret puppet/test_key: Vault is sealed"
        )


class TestKv2Read:
    def test_found(self, hvac_store, client):
        client.secrets.kv.v2.read_secret_version.return_value = {
            "data": {"data": {"value": "v2"}, "metadata": {"version": 1}}
        }

        result = hvac_store.read("secret/", "db/password", "kv2")

        assert result.record == {"value": "v2"}
        client.secrets.kv.v2.read_secret_version.assert_called_once_with(
            path="db/password", mount_point="secret", raise_on_deleted_version=False
        )
        client.read.assert_not_called()

    def test_not_found(self, hvac_store, client):
        client.secrets.kv.v2.read_secret_version.side_effect = InvalidPath()

        assert hvac_store.read("secret", "missing", "kv-v2").outcome is ReadOutcome.NOT_FOUND

    def test_deleted_version(self, hvac_store, client):
        client.secrets.kv.v2.read_secret_version.return_value = {
            "data": {"data": None, "metadata": {"deletion_time": "2024-01-01T00:00:00Z"}}
        }

        assert hvac_store.read("secret", "deleted", "kv2").outcome is ReadOutcome.NOT_FOUND

    def test_permission_denied(self, hvac_store, client):
        client.secrets.kv.v2.read_secret_version.side_effect = Forbidden(
            errors=["permission denied"]
        )

        assert hvac_store.read("secret", "key", "kv2").outcome is ReadOutcome.AUTH_FAILURE

    def test_server_error_is_tagged(self, hvac_store, client):
        client.secrets.kv.v2.read_secret_version.side_effect = InternalServerError(
            errors=["internal error"]
        )

        with pytest.raises(VaultLookupError) as exc_info:
            hvac_store.read("secret", "db/password", "kv2")

        assert str(exc_info.value) == (
            "[hiera-vault] could not read secret secret/data/db/password: internal error"
        )


def test_join_path():
    assert join_path("puppet/", "/test_key") == "puppet/test_key"
    assert join_path("", "test_key") == "test_key"
    assert join_path("a/b", "c/d") == "a/b/c/d"


def test_secret_path():
    assert secret_path("puppet", "test_key", "kv") == "puppet/test_key"
    assert secret_path("secret/", "test_key", "kv2") == "secret/data/test_key"
    assert secret_path("secret", "a/b", "kv-v2") == "secret/data/a/b"
