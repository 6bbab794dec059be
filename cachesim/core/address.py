"""Address decoding.

An address is treated as a 32-bit word split, from the most significant bit
down, into three fields:

    | tag (tag_bits) | index (index_bits) | offset (offset_bits) |

tag_bits is always 32 - index_bits - offset_bits, so the three widths cover
the whole word even when the index/offset widths were truncated from a
non power-of-two geometry.
"""
from typing import Tuple

ADDRESS_WIDTH = 32
ADDRESS_MASK = (1 << ADDRESS_WIDTH) - 1


def decode(address: int, tag_bits: int, index_bits: int, offset_bits: int) -> Tuple[int, int]:
    """Split `address` into (tag, set_index). The block offset is dropped."""
    address &= ADDRESS_MASK
    low_bits = ADDRESS_WIDTH - tag_bits
    tag = address >> low_bits if tag_bits > 0 else 0
    # index field sits directly above the offset field
    set_index = (address >> offset_bits) & ((1 << index_bits) - 1)
    return tag, set_index


__all__ = ["ADDRESS_WIDTH", "ADDRESS_MASK", "decode"]
