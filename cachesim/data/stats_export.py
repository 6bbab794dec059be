"""Statistics and exporter.
"""
import csv
import json
from dataclasses import dataclass, asdict, fields
from typing import Dict, Optional


@dataclass
class Statistics:
    """Counters accumulated by the hierarchy controller over one run.

    The prefetch counters are reserved: nothing populates them, they are
    carried so the report keeps its full layout.
    """

    l1_reads: int = 0
    l1_read_misses: int = 0
    l1_writes: int = 0
    l1_write_misses: int = 0
    l1_write_backs: int = 0

    l2_reads: int = 0
    l2_read_misses: int = 0
    l2_writes: int = 0
    l2_write_misses: int = 0
    l2_write_backs: int = 0

    total_memory_traffic: int = 0

    l1_prefetches: int = 0
    l2_prefetches: int = 0
    l2_reads_from_l1_prefetch: int = 0
    l2_read_misses_from_l1_prefetch: int = 0

    def reset(self):
        # counters start from zero
        for f in fields(self):
            setattr(self, f.name, 0)

    @property
    def l1_accesses(self) -> int:
        return self.l1_reads + self.l1_writes

    @property
    def l1_miss_rate(self) -> float:
        misses = self.l1_read_misses + self.l1_write_misses
        return (misses / self.l1_accesses) if self.l1_accesses else 0.0

    @property
    def l2_miss_rate(self) -> float:
        return (self.l2_read_misses / self.l2_reads) if self.l2_reads else 0.0

    def as_dict(self) -> Dict[str, float]:
        data = asdict(self)
        data['l1_miss_rate'] = self.l1_miss_rate
        data['l2_miss_rate'] = self.l2_miss_rate
        return data


def export_stats_json(stats: Statistics, fpath: str) -> str:
    """Write the counters and miss rates to a JSON file. Returns the path."""
    with open(fpath, 'w', encoding='utf-8') as fh:
        json.dump({'stats': stats.as_dict()}, fh, indent=2)
    return fpath


def export_chart_pdf(stats: Statistics, fpath: str, title: Optional[str] = None) -> str:
    """Render per-level demand traffic (hits vs misses) as a bar chart PDF.

    Returns the saved file path.
    """
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    labels = ['L1 reads', 'L1 writes', 'L2 reads', 'L2 writes']
    misses = [stats.l1_read_misses, stats.l1_write_misses, stats.l2_read_misses, stats.l2_write_misses]
    # the reads/writes counters include the accesses that were serviced after a miss
    totals = [stats.l1_reads, stats.l1_writes, stats.l2_reads, stats.l2_writes]
    hits = [max(0, t - m) for t, m in zip(totals, misses)]

    fig, ax = plt.subplots(figsize=(6, 3))
    ax.bar(labels, hits, color='#23967F', label='hits')
    ax.bar(labels, misses, bottom=hits, color='#E56B70', label='misses')
    ax.set_ylabel('Accesses')
    ax.set_title(title or f'Memory traffic: {stats.total_memory_traffic}')
    ax.legend()
    fig.tight_layout()
    fig.savefig(fpath, format='pdf', dpi=150)
    plt.close(fig)
    return fpath


class Exporter:
    @staticmethod
    def export_stats_csv(path: str, stats: Statistics):
        data = stats.as_dict()
        with open(path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(list(data.keys()))
            writer.writerow(list(data.values()))
