from __future__ import annotations

import re
from typing import Optional

from redis.asyncio import Redis

from email_proof.domain.ports.backing_cache import BackingCachePort


_LUA_COMPARE_AND_SET = """
-- KEYS[1]: collection key
-- ARGV[1]: '1' when a current value is expected, '0' when the key must be absent
-- ARGV[2]: expected current value
-- ARGV[3]: '1' to store ARGV[4], '0' to delete the key
-- ARGV[4]: new value
-- ARGV[5]: ttl seconds
local key = KEYS[1]
local cur = redis.call('GET', key)
if ARGV[1] == '1' then
  if cur ~= ARGV[2] then
    return 0
  end
elseif cur then
  return 0
end
if ARGV[3] == '1' then
  redis.call('SET', key, ARGV[4], 'EX', tonumber(ARGV[5]))
else
  redis.call('DEL', key)
end
return 1
"""

_GLOB_SPECIAL = re.compile(r"([\\*?\[\]])")


def _escape_glob(value: str) -> str:
    return _GLOB_SPECIAL.sub(r"\\\1", value)


class RedisBackingCache(BackingCachePort):
    def __init__(self, redis: Redis, *, scan_count: int = 200) -> None:
        self._redis = redis
        self._scan_count = scan_count

    async def get(self, key: str) -> Optional[str]:
        return await self._redis.get(key)

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        await self._redis.set(key, value, ex=ttl_seconds)

    async def delete(self, key: str) -> None:
        await self._redis.delete(key)

    async def scan_keys(self, prefix: str) -> list[str]:
        match = f"{_escape_glob(prefix)}*"
        # SCAN may return a key more than once
        keys = {
            key
            async for key in self._redis.scan_iter(match=match, count=self._scan_count)
        }
        return sorted(keys)

    async def compare_and_set(
        self,
        key: str,
        expected: Optional[str],
        value: Optional[str],
        ttl_seconds: int,
    ) -> bool:
        res = await self._redis.eval(
            _LUA_COMPARE_AND_SET,
            1,
            key,
            "0" if expected is None else "1",
            expected or "",
            "0" if value is None else "1",
            value or "",
            ttl_seconds,
        )
        return int(res) == 1
