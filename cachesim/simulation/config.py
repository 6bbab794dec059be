"""Simulation configuration.

Five unsigned integers describe the hierarchy: block size, L1 capacity and
associativity, L2 capacity and associativity. An L2 capacity of 0 means the
machine has no L2.
"""
from dataclasses import dataclass

from cachesim.core.errors import ConfigurationError

NUMERIC_FIELDS = ('block_size', 'l1_size', 'l1_assoc', 'l2_size', 'l2_assoc')


@dataclass
class SimulationConfig:
    block_size: int
    l1_size: int
    l1_assoc: int
    l2_size: int = 0
    l2_assoc: int = 0
    trace_file: str = ''

    @property
    def has_l2(self) -> bool:
        return self.l2_size != 0

    def validate(self) -> 'SimulationConfig':
        for name in NUMERIC_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {value}")
        if self.block_size == 0:
            raise ConfigurationError("block_size must be >= 1")
        if self.l1_size == 0 or self.l1_assoc == 0:
            raise ConfigurationError("L1 size and associativity must be >= 1")
        if self.l1_size < self.l1_assoc * self.block_size:
            raise ConfigurationError(
                f"L1 size {self.l1_size} holds no complete set of "
                f"{self.l1_assoc} x {self.block_size}-byte blocks"
            )
        if self.has_l2:
            if self.l2_assoc == 0:
                raise ConfigurationError("L2 associativity must be >= 1 when L2 size is non-zero")
            if self.l2_size < self.l2_assoc * self.block_size:
                raise ConfigurationError(
                    f"L2 size {self.l2_size} holds no complete set of "
                    f"{self.l2_assoc} x {self.block_size}-byte blocks"
                )
        return self

    @classmethod
    def from_strings(cls, block_size, l1_size, l1_assoc, l2_size, l2_assoc, trace_file) -> 'SimulationConfig':
        """Build a validated config from raw command-line tokens."""
        values = []
        for name, raw in zip(NUMERIC_FIELDS, (block_size, l1_size, l1_assoc, l2_size, l2_assoc)):
            try:
                values.append(int(str(raw), 10))
            except ValueError:
                raise ConfigurationError(f"{name} must be an unsigned integer, got {raw!r}") from None
        return cls(*values, trace_file=str(trace_file)).validate()
