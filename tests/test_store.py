"""Unit tests for the key-value stores."""
import pytest

from creatorai.errors import PersistenceError
from creatorai.memory import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    create_key_value_store,
)


class TestKeyValueStoreInterface:
    """Tests for the abstract KeyValueStore interface."""

    def test_store_is_abstract(self):
        """Test that KeyValueStore cannot be instantiated directly."""
        with pytest.raises(TypeError):
            KeyValueStore()  # type: ignore


class TestInMemoryStore:
    """Tests for InMemoryKeyValueStore."""

    def test_get_set_remove(self):
        store = InMemoryKeyValueStore()

        assert store.get("theme") is None
        store.set("theme", "dark")
        assert store.get("theme") == "dark"
        store.remove("theme")
        assert store.get("theme") is None

    def test_remove_missing_key(self):
        InMemoryKeyValueStore().remove("missing")

    def test_initial_data_is_copied(self):
        initial = {"a": "1"}
        store = InMemoryKeyValueStore(initial)
        store.set("a", "2")
        assert initial == {"a": "1"}
        assert "a" in store


class TestJsonFileStore:
    """Tests for JsonFileKeyValueStore."""

    def test_missing_file_is_empty(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "store.json")
        assert store.get("anything") is None

    def test_values_survive_new_instance(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        JsonFileKeyValueStore(path).set("authToken", "abc")

        assert JsonFileKeyValueStore(path).get("authToken") == "abc"
        assert path.exists()

    def test_keys_are_independent(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "store.json")
        store.set("a", "1")
        store.set("b", "2")
        store.remove("a")

        assert store.get("a") is None
        assert store.get("b") == "2"

    def test_remove_missing_key(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "store.json")
        store.remove("missing")
        assert not store.path.exists()

    @pytest.mark.parametrize("content", ["{broken", "[1, 2, 3]"])
    def test_corrupt_file_raises(self, tmp_path, content):
        """Test unreadable files surface as PersistenceError."""
        path = tmp_path / "store.json"
        path.write_text(content)
        store = JsonFileKeyValueStore(path)

        with pytest.raises(PersistenceError) as exc_info:
            store.get("theme")
        assert exc_info.value.operation == "read"

    def test_expands_user(self):
        store = JsonFileKeyValueStore("~/somewhere/store.json")
        assert "~" not in str(store.path)


class TestStoreFactory:
    """Tests for create_key_value_store."""

    def test_create_memory_store(self):
        store = create_key_value_store("memory")
        assert isinstance(store, InMemoryKeyValueStore)
        assert store.backend_type == "memory"

    def test_create_file_store(self, tmp_path):
        store = create_key_value_store("file", path=tmp_path / "s.json")
        assert isinstance(store, JsonFileKeyValueStore)
        assert store.backend_type == "file"

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unsupported store backend"):
            create_key_value_store("redis")
