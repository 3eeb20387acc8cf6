"""
Global pytest configuration and fixtures.
"""

import pytest

from hiera_vault.lookup import SimpleLookupContext
from hiera_vault.store import ReadResult, join_path


class FakeSecretStore:
    """In-memory SecretStore keyed by full path ("<mount>/<key>")."""

    def __init__(self, secrets=None, sealed=False, denied_mounts=()):
        self.secrets = dict(secrets or {})
        self.sealed = sealed
        self.denied_mounts = set(denied_mounts)
        self.reads = []
        self.seal_checks = 0

    def is_sealed(self):
        self.seal_checks += 1
        return self.sealed

    def read(self, mount, key, backend):
        path = join_path(mount, key)
        self.reads.append((backend, path))
        if mount in self.denied_mounts:
            return ReadResult.auth_failure("permission denied")
        if path not in self.secrets:
            return ReadResult.not_found()
        return ReadResult.found(dict(self.secrets[path]))


@pytest.fixture(autouse=True)
def clean_vault_env(monkeypatch):
    """Keep the developer's Vault environment out of the tests.

    Every test starts without VAULT_TOKEN, VAULT_ADDR or an options file
    configured, and sets what it needs itself.
    """
    for name in ("VAULT_TOKEN", "VAULT_ADDR", "HIERA_VAULT_CONFIG", "HIERA_VAULT_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def store():
    """Store mirroring the secrets written under the 'puppet' kv mount."""
    return FakeSecretStore(
        {
            "puppet/test_key": {"value": "default"},
            "puppet/array_key": {"value": '["a", "b", "c"]'},
            "puppet/hash_key": {"value": '{"a": 1, "b": 2, "c": 3}'},
            "puppet/multiple_values_key": {"a": 1, "b": 2, "c": 3},
            "puppet/values_key": {"value": 123, "a": 1, "b": 2, "c": 3},
            "puppet/broken_json_key": {"value": "[,"},
            "puppet/confined_vault_key": {"value": "find_me"},
        }
    )


@pytest.fixture
def store_factory(store):
    """Factory handing out the fake store and remembering the tokens it got."""

    def factory(options, token):
        factory.tokens.append(token)
        return store

    factory.tokens = []
    return factory


@pytest.fixture
def context():
    return SimpleLookupContext(explain_enabled=True)


@pytest.fixture
def vault_options():
    return {
        "address": "http://127.0.0.1:8200",
        "token": "test-token",
        "mounts": {"kv": ["puppet"]},
    }


@pytest.fixture
def make_store():
    """Build additional fake stores inside a test."""
    return FakeSecretStore
