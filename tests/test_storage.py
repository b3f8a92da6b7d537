import asyncio
import json

from fingerprint_token.config import TokenConfig
from fingerprint_token.storage import (
    InMemoryTokenStore,
    JsonFileTokenStore,
    PostgresTokenStore,
    create_store_from_env,
)
from fingerprint_token.token import issue


def test_in_memory_store_round_trip() -> None:
    async def run() -> None:
        store = InMemoryTokenStore()
        assert await store.load() is None
        record = issue({"a": 1}).to_dict()
        await store.save(record)
        assert await store.load() == record

    asyncio.run(run())


def test_json_file_store_round_trip(tmp_path) -> None:
    async def run() -> None:
        path = tmp_path / "nested" / "uuid_store.json"
        store = JsonFileTokenStore(path)
        assert await store.load() is None

        first = issue({"a": 1}).to_dict()
        await store.save(first)
        second = issue({"a": 2}).to_dict()
        await store.save(second)

        assert await store.load() == second
        assert json.loads(path.read_text(encoding="utf-8")) == second
        assert '\n  "uuid"' in path.read_text(encoding="utf-8")
        assert [p.name for p in path.parent.iterdir()] == ["uuid_store.json"]

    asyncio.run(run())


def test_json_file_store_ignores_garbage(tmp_path) -> None:
    async def run() -> None:
        path = tmp_path / "uuid_store.json"
        store = JsonFileTokenStore(path)
        path.write_text("{not json", encoding="utf-8")
        assert await store.load() is None
        path.write_text("[1, 2]", encoding="utf-8")
        assert await store.load() is None

    asyncio.run(run())


def test_create_store_from_env_picks_backend(tmp_path) -> None:
    file_store = create_store_from_env(TokenConfig(store_path=str(tmp_path / "t.json")))
    assert isinstance(file_store, JsonFileTokenStore)

    pg_store = create_store_from_env(TokenConfig(dsn="postgresql://localhost/tokens"))
    assert isinstance(pg_store, PostgresTokenStore)
    assert pg_store.pool is None
