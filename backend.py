import json
import threading
from functools import lru_cache
from typing import Any, Dict, List, Optional, Protocol

import redis

from constants import KV_BACKEND, REDIS_DB, REDIS_HOST, REDIS_PASSWORD, REDIS_PORT
from errors import StoreError
from logging_config import get_logger

logger = get_logger(__name__)

# Characters with a meaning in SCAN MATCH patterns
_GLOB_SPECIAL = set("*?[]\\")


def escape_glob(value: str) -> str:
    return "".join("\\" + ch if ch in _GLOB_SPECIAL else ch for ch in value)


class KVBackend(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def put(self, key: str, value: str) -> None: ...

    def list_keys(self, prefix: str) -> List[str]: ...

    def get_json(self, key: str) -> Any: ...

    def put_json(self, key: str, value: Any) -> None: ...


class JSONMixin:
    """JSON (de)serialization on top of get/put. Every stored value is JSON text."""

    def get_json(self, key: str) -> Any:
        raw = self.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(f"Undecodable value stored under {key}: {e}")
            raise StoreError("Stored value is not valid JSON") from e

    def put_json(self, key: str, value: Any) -> None:
        try:
            raw = json.dumps(value)
        except (TypeError, ValueError) as e:
            logger.error(f"Could not serialize value for {key}: {e}")
            raise StoreError("Value is not JSON serializable") from e
        self.put(key, raw)


class RedisBackend(JSONMixin):
    def __init__(self, client: Optional[redis.Redis] = None):
        if client is None:
            logger.info(f"Initializing RedisBackend with connection to {REDIS_HOST}:{REDIS_PORT}")
            client = redis.Redis(
                host=REDIS_HOST,
                port=REDIS_PORT,
                password=REDIS_PASSWORD,
                db=REDIS_DB,
                decode_responses=True,
            )
        self.redis_client = client

    def ping(self) -> bool:
        try:
            return bool(self.redis_client.ping())
        except redis.RedisError as e:
            logger.error(f"Failed to reach Redis at {REDIS_HOST}:{REDIS_PORT}: {e}", exc_info=True)
            raise StoreError("Storage unavailable") from e

    def get(self, key: str) -> Optional[str]:
        try:
            value = self.redis_client.get(key)
        except redis.RedisError as e:
            logger.error(f"Redis GET failed for {key}: {e}", exc_info=True)
            raise StoreError() from e
        logger.debug(f"GET {key} -> {'hit' if value is not None else 'miss'}")
        return value

    def put(self, key: str, value: str) -> None:
        try:
            self.redis_client.set(key, value)
        except redis.RedisError as e:
            logger.error(f"Redis SET failed for {key}: {e}", exc_info=True)
            raise StoreError() from e
        logger.debug(f"SET {key}")

    def list_keys(self, prefix: str) -> List[str]:
        """Return every key under prefix in ascending lexicographic order.

        SCAN walks the keyspace in hash order, so the result is sorted here.
        """
        pattern = escape_glob(prefix) + "*"
        try:
            keys = list(self.redis_client.scan_iter(match=pattern, count=500))
        except redis.RedisError as e:
            logger.error(f"Redis SCAN failed for prefix {prefix}: {e}", exc_info=True)
            raise StoreError() from e
        keys = sorted(set(keys))
        logger.debug(f"SCAN {pattern} -> {len(keys)} keys")
        return keys


class MemoryBackend(JSONMixin):
    """Process-local store with the same contract as RedisBackend."""

    def __init__(self):
        self._lock = threading.Lock()
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StoreError("Only string values can be stored")
        with self._lock:
            self._data[key] = value

    def list_keys(self, prefix: str) -> List[str]:
        with self._lock:
            return sorted(k for k in self._data if k.startswith(prefix))


@lru_cache(maxsize=1)
def get_backend():
    if KV_BACKEND == "memory":
        logger.info("Using in-memory KV backend; state will not survive a restart")
        return MemoryBackend()
    if KV_BACKEND != "redis":
        raise StoreError(f"Unknown KV_BACKEND {KV_BACKEND!r}")
    return RedisBackend()
