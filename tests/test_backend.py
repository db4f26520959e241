"""Tests for the KV backends."""

from unittest import mock

import pytest
import redis

from backend import MemoryBackend, RedisBackend, escape_glob
from errors import StoreError


def test_memory_backend_get_put(kv):
    assert kv.get("missing") is None
    kv.put("a", "1")
    assert kv.get("a") == "1"
    kv.put("a", "2")
    assert kv.get("a") == "2"


def test_memory_backend_lists_prefix_sorted(kv):
    for key in ["p:3", "p:1", "q:0", "p:2", "p"]:
        kv.put(key, "x")
    assert kv.list_keys("p:") == ["p:1", "p:2", "p:3"]


def test_json_helpers(kv):
    kv.put_json("k", {"room_id": "R1", "participants": ["austria", "germany"]})
    assert kv.get("k") == '{"room_id": "R1", "participants": ["austria", "germany"]}'
    assert kv.get_json("k")["participants"] == ["austria", "germany"]
    assert kv.get_json("nope") is None


def test_undecodable_value_is_a_store_error(kv):
    kv.put("k", "{not json")
    with pytest.raises(StoreError):
        kv.get_json("k")


def test_unserializable_value_is_a_store_error(kv):
    with pytest.raises(StoreError):
        kv.put_json("k", {"x": object()})


def test_memory_backend_rejects_non_string_values():
    with pytest.raises(StoreError):
        MemoryBackend().put("k", 1)


def test_escape_glob():
    assert escape_glob("conv:abc:msg:") == "conv:abc:msg:"
    assert escape_glob("room:a*b?[c]\\") == "room:a\\*b\\?\\[c\\]\\\\"


@pytest.fixture
def redis_client():
    return mock.MagicMock(spec=redis.Redis)


def test_redis_list_keys_escapes_and_sorts(redis_client):
    redis_client.scan_iter.return_value = iter(["conv:a*:msg:2", "conv:a*:msg:1", "conv:a*:msg:2"])
    backend = RedisBackend(client=redis_client)
    assert backend.list_keys("conv:a*:msg:") == ["conv:a*:msg:1", "conv:a*:msg:2"]
    redis_client.scan_iter.assert_called_once_with(match="conv:a\\*:msg:*", count=500)


def test_redis_get_and_put(redis_client):
    redis_client.get.return_value = "true"
    backend = RedisBackend(client=redis_client)
    assert backend.get_json("room:R1:seat:italy") is True
    backend.put_json("room:R1:seat:italy", True)
    redis_client.set.assert_called_once_with("room:R1:seat:italy", "true")


@pytest.mark.parametrize("method,args", [("get", ("k",)), ("put", ("k", "v")), ("list_keys", ("p",))])
def test_redis_errors_become_store_errors(redis_client, method, args):
    redis_client.get.side_effect = redis.ConnectionError("down")
    redis_client.set.side_effect = redis.ConnectionError("down")
    redis_client.scan_iter.side_effect = redis.ConnectionError("down")
    backend = RedisBackend(client=redis_client)
    with pytest.raises(StoreError):
        getattr(backend, method)(*args)
