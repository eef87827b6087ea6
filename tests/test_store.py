"""
MockAPI — Collection Store Unit Tests
======================================

What:  Tests for CollectionStore reads/writes and the async data file loader.
How:   In-memory stores and tmp_path data files; no HTTP.

What we test:
    ✅ Document parsing (non-list keys skipped, non-object rejected)
    ✅ Lookups by int or string id, NotFoundError for misses
    ✅ Insert id assignment and collisions
    ✅ PUT/PATCH/DELETE never mutate previously returned records/lists
    ✅ load_store with valid, missing and malformed files
"""

import json

import pytest

from mockapi.exceptions import NotFoundError, StoreUnavailableError, ValidationError
from mockapi.store import CollectionStore, load_store


class TestFromDocument:

    def test_list_keys_become_collections(self):
        store = CollectionStore.from_document(
            {"users": [{"id": 1}], "profile": {"name": "x"}, "movies": []}
        )
        assert store.names() == ["users", "movies"]
        assert not store.has("profile")

    def test_non_object_rejected(self):
        with pytest.raises(StoreUnavailableError):
            CollectionStore.from_document([{"id": 1}])

    def test_non_dict_items_dropped(self):
        store = CollectionStore.from_document({"tags": [{"id": 1}, "loose", 3]})
        assert store.all("tags") == [{"id": 1}]


class TestReads:

    def test_get_by_string_or_int(self, store):
        assert store.get("users", "1")["name"] == "Maya"
        assert store.get("users", 1)["name"] == "Maya"

    def test_get_missing_record(self, store):
        with pytest.raises(NotFoundError, match="users with ID '42'"):
            store.get("users", "42")

    def test_unknown_collection(self, store):
        with pytest.raises(NotFoundError):
            store.all("widgets")

    def test_all_returns_copy(self, store):
        users = store.all("users")
        users.append({"id": 99})
        assert len(store.all("users")) == 2


class TestWrites:

    def test_insert_assigns_next_numeric_id(self, store):
        record = store.insert("users", {"name": "Amara"})
        assert record["id"] == 3
        assert store.get("users", 3)["name"] == "Amara"

    def test_insert_into_empty_collection(self, store):
        assert store.insert("cart", {"productId": 1})["id"] == 1

    def test_insert_with_string_ids_gets_generated_id(self):
        store = CollectionStore({"categories": [{"id": "1", "name": "Books"}]})
        record = store.insert("categories", {"name": "Music"})
        assert isinstance(record["id"], str)
        assert record["id"] != "1"

    def test_insert_keeps_given_id(self, store):
        assert store.insert("users", {"id": 10, "name": "X"})["id"] == 10

    def test_insert_duplicate_id_rejected(self, store):
        with pytest.raises(ValidationError, match="already exists"):
            store.insert("users", {"id": "1", "name": "Dup"})

    def test_insert_does_not_alias_payload(self, store):
        payload = {"name": "Amara"}
        store.insert("users", payload)
        assert "id" not in payload

    def test_replace_keeps_id(self, store):
        record = store.replace("users", "1", {"id": 500, "name": "Maya C."})
        assert record == {"id": 1, "name": "Maya C."}
        assert store.get("users", 1) == record

    def test_update_merges(self, store):
        record = store.update("users", "2", {"location": "Berlin"})
        assert record == {"id": 2, "name": "Jonas", "location": "Berlin"}

    def test_writes_do_not_mutate_handed_out_records(self, store):
        before = store.get("users", 1)
        listing = store.all("users")
        store.update("users", 1, {"name": "Changed"})
        store.delete("users", 2)
        assert before["name"] == "Maya"
        assert [u["id"] for u in listing] == [1, 2]

    def test_delete(self, store):
        store.delete("users", "1")
        assert [u["id"] for u in store.all("users")] == [2]
        with pytest.raises(NotFoundError):
            store.delete("users", "1")


class TestLoadStore:

    @pytest.mark.asyncio
    async def test_load_valid_file(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text(json.dumps({"products": [{"id": 1, "name": "Mug"}]}), encoding="utf-8")

        store = await load_store(str(path))

        assert store.all("products") == [{"id": 1, "name": "Mug"}]

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        with pytest.raises(StoreUnavailableError, match="not found"):
            await load_store(str(tmp_path / "absent.json"))

    @pytest.mark.asyncio
    async def test_malformed_json(self, tmp_path):
        path = tmp_path / "db.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreUnavailableError, match="could not be read"):
            await load_store(str(path))

    @pytest.mark.asyncio
    async def test_bundled_seed_data(self):
        from mockapi.config import DEFAULT_DATA_FILE

        store = await load_store(str(DEFAULT_DATA_FILE))

        for name in ("users", "posts", "products", "categories", "movies", "cart"):
            assert store.has(name)
        for product in store.all("products"):
            for field in ("id", "categoryId", "name", "price", "originalPrice",
                          "inStock", "rating", "createdAt"):
                assert field in product
