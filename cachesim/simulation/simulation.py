"""Simulation wrapper used by the command line.

Builds both cache levels from a SimulationConfig and forwards the trace
records to the hierarchy controller.
"""
from typing import Callable, Iterable, Optional, Tuple

from cachesim.core.cache import CacheLevel
from cachesim.core.hierarchy import HierarchyController
from cachesim.data.stats_export import Statistics
from cachesim.simulation.config import SimulationConfig
from cachesim.simulation.report import render_report
from cachesim.simulation.trace import read_trace


class Simulation:
    def __init__(self, config: SimulationConfig):
        self.config = config.validate()
        self.l1 = CacheLevel(config.l1_size, config.l1_assoc, config.block_size, name="L1")
        self.l2 = CacheLevel(config.l2_size, config.l2_assoc, config.block_size, name="L2")
        self.controller = HierarchyController(self.l1, self.l2, stats=Statistics())

    @property
    def stats(self) -> Statistics:
        return self.controller.stats

    def run(self, records: Optional[Iterable[Tuple[str, int]]] = None,
            callback: Optional[Callable[[dict], None]] = None) -> Statistics:
        """Run the configured trace file, or `records` when given."""
        if records is None:
            records = read_trace(self.config.trace_file)
        return self.controller.run_trace(records, callback=callback)

    def render_report(self) -> str:
        return render_report(self.l1, self.l2, self.stats)
