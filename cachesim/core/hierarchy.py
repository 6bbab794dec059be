"""HierarchyController coordinates accesses across L1, L2 and main memory.

Feeds (operation, address) pairs through the levels and updates the
statistics counters. Policy summary:

- L1 hit: count the read/write, done.
- L1 miss: make room in L1 (a dirty victim is written back to L2, or to
  memory when there is no L2), fetch the line from L2 (or memory), install
  it in L1 and, for a write, mark it dirty.
- Every line that reaches L2 from memory costs one unit of memory traffic,
  as does every dirty line that leaves the last cache level.
"""
from typing import Callable, Iterable, Optional, Tuple

from .cache import Access, CacheLevel
from .errors import TraceFormatError
from ..data.stats_export import Statistics

READ = 'r'
WRITE = 'w'


class HierarchyController:
    def __init__(self, l1: CacheLevel, l2: Optional[CacheLevel] = None, stats: Optional[Statistics] = None):
        self.l1 = l1
        self.l2 = l2 if l2 is not None else CacheLevel(0, 0, 0, name="L2")
        self.stats = stats or Statistics()

    def reset(self):
        # clear stats and cache contents
        self.stats.reset()
        self.l1.reset()
        self.l2.reset()

    def run_trace(self, records: Iterable[Tuple[str, int]], callback: Optional[Callable[[dict], None]] = None) -> Statistics:
        """Consume `records` lazily, one access at a time."""
        for op, address in records:
            info = self.access(op, address)
            if callback:
                callback(info)
        return self.stats

    def access(self, op: str, address: int) -> dict:
        """Resolve one access through the hierarchy.

        Returns a dict describing what happened, for callers that trace
        progress. The counters are updated on `self.stats`.
        """
        if op not in (READ, WRITE):
            raise TraceFormatError(f"unknown operation {op!r}")
        is_write = op == WRITE
        stats = self.stats
        traffic_before = stats.total_memory_traffic

        info = {
            'op': op,
            'address': address,
            'l1_hit': False,
            'l2_hit': None,
            'l1_evicted': None,
            'l2_evicted': [],
            'write_back': False,
        }

        index1, tag1 = self.l1.decode(address)
        if is_write:
            outcome = self.l1.write(index1, tag1)
        else:
            outcome = self.l1.read(index1, tag1)

        if outcome is Access.HIT:
            info['l1_hit'] = True
            self._count_l1(is_write)
            info['memory_traffic'] = 0
            return info

        if is_write:
            stats.l1_write_misses += 1
        else:
            stats.l1_read_misses += 1

        if self.l1.set_is_full(index1):
            victim = self.l1.evict_lru(index1)
            info['l1_evicted'] = victim
            if victim.was_dirty:
                info['write_back'] = True
                self._write_back(victim.evicted_address, info)

        if self.l2.is_present():
            index2, tag2 = self.l2.decode(address)
            if self.l2.read(index2, tag2) is Access.HIT:
                info['l2_hit'] = True
                stats.l2_reads += 1
            else:
                info['l2_hit'] = False
                stats.l2_read_misses += 1
                self._make_room_in_l2(index2, info)
                self.l2.install(index2, tag2, address)
                stats.total_memory_traffic += 1
                stats.l2_reads += 1
        else:
            stats.total_memory_traffic += 1

        self.l1.install(index1, tag1, address)
        if is_write:
            self.l1.write(index1, tag1)
        self._count_l1(is_write)

        info['memory_traffic'] = stats.total_memory_traffic - traffic_before
        return info

    def _count_l1(self, is_write: bool):
        if is_write:
            self.stats.l1_writes += 1
        else:
            self.stats.l1_reads += 1

    def _write_back(self, address: int, info: dict):
        """Push a dirty L1 victim down one level."""
        stats = self.stats
        if not self.l2.is_present():
            stats.l1_write_backs += 1
            stats.total_memory_traffic += 1
            return

        index2, tag2 = self.l2.decode(address)
        if self.l2.write(index2, tag2) is Access.MISS:
            stats.l2_write_misses += 1
            self._make_room_in_l2(index2, info)
            # the written-back line lands in L2 clean
            self.l2.install(index2, tag2, address)
            stats.total_memory_traffic += 1
        stats.l1_write_backs += 1
        stats.l2_writes += 1

    def _make_room_in_l2(self, index: int, info: dict):
        if not self.l2.set_is_full(index):
            return
        victim = self.l2.evict_lru(index)
        info['l2_evicted'].append(victim)
        if victim.was_dirty:
            self.stats.l2_write_backs += 1
            self.stats.total_memory_traffic += 1


__all__ = ["READ", "WRITE", "HierarchyController"]
