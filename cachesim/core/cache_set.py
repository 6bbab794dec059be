"""One associative set and its LRU replacement algorithm.

Each slot carries a recency rank (0 = most recently used). A fresh set
numbers its slots 0..A-1 so the ranks start out as a permutation, and
`touch` keeps them one: the touched slot moves to rank 0 and only the slots
that were more recent than it age by one.
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Optional

from cachesim.core.errors import ReplacementInvariantViolation


@dataclass
class Block:
    """A single slot (way) inside a set.

    Fields:
    - tag: tag of the resident line, None until the slot is first filled
    - address: full address of the resident line, used for write-backs
    - valid: whether the slot currently holds a line
    - dirty: whether the line was written since it was installed
    - recency: LRU rank, 0 = most recently used
    """

    tag: Optional[int] = None
    address: int = 0
    valid: bool = False
    dirty: bool = False
    recency: int = 0


class EvictionOutcome(NamedTuple):
    evicted_address: int
    was_dirty: bool


class CacheSet:
    def __init__(self, associativity: int):
        if associativity < 1:
            raise ValueError("associativity must be >= 1")
        self.associativity = associativity
        self.blocks: List[Block] = [Block(recency=way) for way in range(associativity)]

    def probe(self, tag: int) -> Optional[int]:
        """Return the way holding a valid copy of `tag`, or None."""
        for way, block in enumerate(self.blocks):
            if block.valid and block.tag == tag:
                return way
        return None

    def find_tag(self, tag: int) -> Optional[int]:
        """Return the first way whose tag matches, valid or not."""
        for way, block in enumerate(self.blocks):
            if block.tag == tag:
                return way
        return None

    def touch(self, tag: int) -> None:
        """Make the resident line `tag` the most recently used one."""
        way = self.probe(tag)
        if way is None:
            raise KeyError(f"tag {tag:#x} is not resident in this set")
        self.promote(way)

    def promote(self, way: int) -> None:
        previous = self.blocks[way].recency
        for other, block in enumerate(self.blocks):
            if other != way and block.recency < previous:
                block.recency += 1
        self.blocks[way].recency = 0

    def is_full(self) -> bool:
        return all(block.valid for block in self.blocks)

    def install(self, tag: int, address: int) -> int:
        """Fill the first invalid slot with `tag` and return its way.

        Raises ReplacementInvariantViolation when every slot is valid; callers
        must evict first.
        """
        for way, block in enumerate(self.blocks):
            if not block.valid:
                block.tag = tag
                block.address = address
                block.valid = True
                block.dirty = False
                self.promote(way)
                return way
        raise ReplacementInvariantViolation(
            f"no free slot to install tag {tag:#x} (associativity {self.associativity})"
        )

    def victim(self) -> int:
        # first slot with a strictly greater rank than the running max wins
        victim_way = 0
        highest = 0
        for way, block in enumerate(self.blocks):
            if block.recency > highest:
                highest = block.recency
                victim_way = way
        return victim_way

    def evict_one(self) -> EvictionOutcome:
        """Invalidate the least recently used slot.

        The slot keeps its tag and address; only valid/dirty are cleared.
        """
        block = self.blocks[self.victim()]
        was_dirty = block.dirty
        block.valid = False
        block.dirty = False
        return EvictionOutcome(block.address, was_dirty)

    def contents(self) -> List[Block]:
        """Slots ordered from most to least recently used."""
        return sorted(self.blocks, key=lambda b: b.recency)

    def reset(self) -> None:
        for way, block in enumerate(self.blocks):
            block.tag = None
            block.address = 0
            block.valid = False
            block.dirty = False
            block.recency = way


__all__ = ["Block", "EvictionOutcome", "CacheSet"]
