"""One level of the cache hierarchy.

This file provides the set-associative cache level used by the hierarchy
controller. Geometry is derived once from the declared capacity:

  set_count   = capacity // (associativity * block_size)
  index_bits  = trunc(log2(set_count))
  offset_bits = trunc(log2(block_size))
  tag_bits    = 32 - index_bits - offset_bits

The log2 values are truncated, not rounded, so a geometry whose set count is
not a power of two silently gets a wider tag field.

A level built with capacity 0 is "absent" (no L2) and rejects every access.
All accessors take an already decoded (set index, tag) pair.
"""

import math
from enum import Enum
from typing import List, Tuple

from cachesim.core.address import ADDRESS_WIDTH, decode
from cachesim.core.cache_set import Block, CacheSet, EvictionOutcome
from cachesim.core.errors import ConfigurationError, LevelNotPresent


class Access(Enum):
    HIT = "hit"
    MISS = "miss"


class CacheLevel:
    """Set-associative cache level with LRU replacement."""

    def __init__(self, capacity: int, associativity: int, block_size: int, name: str = "L1"):
        self.name = name
        self.capacity = capacity
        if capacity == 0:
            self.associativity = 0
            self.block_size = 0
            self.set_count = 0
            self.index_bits = 0
            self.offset_bits = 0
            self.tag_bits = 0
            self.sets: List[CacheSet] = []
            return

        if associativity < 1 or block_size < 1:
            raise ConfigurationError(
                f"{name}: associativity and block size must be >= 1 "
                f"(got assoc={associativity}, block={block_size})"
            )
        set_count = capacity // (associativity * block_size)
        if set_count < 1:
            raise ConfigurationError(
                f"{name}: capacity {capacity} is too small for "
                f"{associativity} ways of {block_size}-byte blocks"
            )
        self.associativity = associativity
        self.block_size = block_size
        self.set_count = set_count
        self.index_bits = int(math.log2(set_count))
        self.offset_bits = int(math.log2(block_size))
        self.tag_bits = ADDRESS_WIDTH - self.index_bits - self.offset_bits
        self.sets = [CacheSet(associativity) for _ in range(set_count)]

    def is_present(self) -> bool:
        return self.capacity != 0

    def _set(self, index: int) -> CacheSet:
        if not self.is_present():
            raise LevelNotPresent(f"{self.name} is not configured")
        return self.sets[index]

    def decode(self, address: int) -> Tuple[int, int]:
        """Return (set_index, tag) for `address` in this level's geometry."""
        if not self.is_present():
            raise LevelNotPresent(f"{self.name} is not configured")
        tag, set_index = decode(address, self.tag_bits, self.index_bits, self.offset_bits)
        return set_index, tag

    def read(self, index: int, tag: int) -> Access:
        cache_set = self._set(index)
        way = cache_set.probe(tag)
        if way is None:
            return Access.MISS
        cache_set.promote(way)
        return Access.HIT

    def write(self, index: int, tag: int) -> Access:
        """Write to a resident line.

        Unlike `read`, a hit only needs a matching tag: a slot that was
        invalidated by eviction but still carries the tag is revived. A miss
        does not allocate.
        """
        cache_set = self._set(index)
        way = cache_set.probe(tag)
        if way is None:
            way = cache_set.find_tag(tag)
        if way is None:
            return Access.MISS
        block = cache_set.blocks[way]
        block.valid = True
        cache_set.promote(way)
        block.dirty = True
        return Access.HIT

    def install(self, index: int, tag: int, address: int) -> int:
        return self._set(index).install(tag, address)

    def set_is_full(self, index: int) -> bool:
        return self._set(index).is_full()

    def evict_lru(self, index: int) -> EvictionOutcome:
        return self._set(index).evict_one()

    def contents(self) -> List[List[Block]]:
        """Per-set slots ordered by ascending recency, for reporting."""
        return [s.contents() for s in self.sets]

    def reset(self):
        """Invalidate every slot and restore the initial recency order."""
        for s in self.sets:
            s.reset()


__all__ = ["Access", "CacheLevel"]
