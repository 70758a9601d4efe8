import threading
from typing import List


class ShardedLock:
    """
    Fixed pool of re-entrant locks selected by key hash.

    Keys that hash to the same shard share a lock; distinct shards never
    block each other.
    """

    def __init__(self, count: int = 16):
        if count < 1:
            raise ValueError("ShardedLock needs at least one shard")
        self._locks: List[threading.RLock] = [threading.RLock() for _ in range(count)]

    def __len__(self) -> int:
        return len(self._locks)

    def index_for(self, key: str) -> int:
        return hash(key) % len(self._locks)

    def lock_for(self, key: str) -> threading.RLock:
        return self._locks[self.index_for(key)]
