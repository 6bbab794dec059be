"""Text rendering of a finished run.

The layout follows the classic course simulator output: a configuration
banner, the contents of every cache level (one row per set, most recently
used slot first, `D` marks dirty lines) and the lettered measurement table.
"""
from typing import List

from cachesim.core.cache import CacheLevel
from cachesim.data.stats_export import Statistics
from cachesim.simulation.config import SimulationConfig


def render_config(config: SimulationConfig) -> str:
    lines = [
        "===== Simulator configuration =====",
        f"BLOCK SIZE:  {config.block_size}",
        f"L1_SIZE:     {config.l1_size}",
        f"L1_ASSOC:    {config.l1_assoc}",
        f"L2_SIZE:     {config.l2_size}",
        f"L2_ASSOC:    {config.l2_assoc}",
        f"trace_file:  {config.trace_file}",
    ]
    return "\n".join(lines)


def render_contents(level: CacheLevel) -> str:
    rows: List[str] = [f"===== {level.name} contents ====="]
    for i, blocks in enumerate(level.contents()):
        row = f"set    {i:>3}: "
        for block in blocks:
            # slots that never held a line print as tag 0
            tag = block.tag if block.tag is not None else 0
            row += f"  {tag:>6x}" + (" D" if block.dirty else "  ")
        rows.append(row)
    return "\n".join(rows)


def render_stats(stats: Statistics) -> str:
    lines = [
        "===== Measurements =====",
        f"a. L1 reads:                   {stats.l1_reads}",
        f"b. L1 read misses:             {stats.l1_read_misses}",
        f"c. L1 writes:                  {stats.l1_writes}",
        f"d. L1 write misses:            {stats.l1_write_misses}",
        f"e. L1 miss rate:               {stats.l1_miss_rate:.4f}",
        f"f. L1 writebacks:              {stats.l1_write_backs}",
        f"g. L1 prefetches:              {stats.l1_prefetches}",
        f"h. L2 reads (demand):          {stats.l2_reads}",
        f"i. L2 read misses (demand):    {stats.l2_read_misses}",
        f"j. L2 reads (prefetch):        {stats.l2_reads_from_l1_prefetch}",
        f"k. L2 read misses (prefetch):  {stats.l2_read_misses_from_l1_prefetch}",
        f"l. L2 writes:                  {stats.l2_writes}",
        f"m. L2 write misses:            {stats.l2_write_misses}",
        f"n. L2 miss rate:               {stats.l2_miss_rate:.4f}",
        f"o. L2 writebacks:              {stats.l2_write_backs}",
        f"p. L2 prefetches:              {stats.l2_prefetches}",
        f"q. memory traffic:             {stats.total_memory_traffic}",
    ]
    return "\n".join(lines)


def render_report(l1: CacheLevel, l2: CacheLevel, stats: Statistics) -> str:
    """Cache contents followed by the measurements."""
    parts = [render_contents(l1)]
    if l2.is_present():
        parts.append(render_contents(l2))
    parts.append(render_stats(stats))
    return "\n".join(parts)


def describe_access(info: dict) -> str:
    """One-line summary of an access result, used for verbose output."""
    kind = 'WRITE' if info['op'] == 'w' else 'READ'
    text = f"{kind} {info['address']:08x}: L1 {'HIT' if info['l1_hit'] else 'MISS'}"
    if info['l2_hit'] is not None:
        text += f", L2 {'HIT' if info['l2_hit'] else 'MISS'}"
    if info['l1_evicted'] is not None:
        text += f", evicted {info['l1_evicted'].evicted_address:08x} from L1"
    if info['write_back']:
        text += " (write-back)"
    for victim in info['l2_evicted']:
        text += f", evicted {victim.evicted_address:08x} from L2"
    if info.get('memory_traffic'):
        text += f", memory traffic +{info['memory_traffic']}"
    return text
