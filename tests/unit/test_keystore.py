"""Tests for apikeygate.keystore — YAML keys file loading and lookup."""

from pathlib import Path

import pytest

from apikeygate.keystore import Client, KeyStore


@pytest.fixture
def keys_file(tmp_path: Path) -> Path:
    path = tmp_path / "keys.yaml"
    path.write_text(
        "clients:\n"
        "  - id: billing-worker\n"
        '    key: "valid-api-key-123"\n'
        "  - id: report-runner\n"
        '    key: "key with spaces"\n'
    )
    return path


class TestKeyStoreLoad:
    def test_load_valid_file(self, keys_file: Path) -> None:
        store = KeyStore.from_yaml(keys_file)
        assert len(store) == 2
        assert store.lookup("valid-api-key-123") == Client(
            id="billing-worker", key="valid-api-key-123"
        )

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            KeyStore.from_yaml(tmp_path / "nonexistent.yaml")

    def test_empty_file_is_empty_store(self, tmp_path: Path) -> None:
        path = tmp_path / "keys.yaml"
        path.write_text("")
        assert len(KeyStore.from_yaml(path)) == 0

    def test_clients_not_a_list(self, tmp_path: Path) -> None:
        path = tmp_path / "keys.yaml"
        path.write_text("clients:\n  billing-worker: abc\n")
        with pytest.raises(ValueError, match="'clients' list"):
            KeyStore.from_yaml(path)

    def test_non_string_key(self, tmp_path: Path) -> None:
        path = tmp_path / "keys.yaml"
        path.write_text("clients:\n  - id: a\n    key: 12345\n")
        with pytest.raises(ValueError, match=r"clients\[0\]"):
            KeyStore.from_yaml(path)

    def test_empty_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="empty key"):
            KeyStore([Client(id="a", key="")])

    def test_duplicate_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            KeyStore([Client(id="a", key="k1"), Client(id="a", key="k2")])


class TestKeyStoreLookup:
    def test_key_with_spaces(self, keys_file: Path) -> None:
        store = KeyStore.from_yaml(keys_file)
        assert store.lookup("key with spaces").id == "report-runner"

    def test_lookup_is_exact(self, keys_file: Path) -> None:
        store = KeyStore.from_yaml(keys_file)
        assert store.lookup("VALID-API-KEY-123") is None
        assert store.lookup("valid-api-key-123 ") is None
        assert store.lookup("") is None

    def test_non_ascii_key(self) -> None:
        store = KeyStore([Client(id="intl", key="clé-ünïcode")])
        assert store.lookup("clé-ünïcode").id == "intl"
        assert store.lookup("cle-unicode") is None
