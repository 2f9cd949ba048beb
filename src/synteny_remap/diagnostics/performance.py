"""
Lightweight run monitoring.

The engine is single-threaded, so memory is sampled inline (once per
flush) instead of from a background thread.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

import psutil


@dataclass
class RunMetrics:
    """Timing and memory samples for one run."""
    start_time: float
    end_time: Optional[float] = None
    memory_samples: List[float] = field(default_factory=list)

    @property
    def total_time(self) -> float:
        """Total execution time in seconds."""
        if self.end_time is None:
            return 0.0
        return self.end_time - self.start_time

    @property
    def peak_memory_mb(self) -> float:
        return max(self.memory_samples) if self.memory_samples else 0.0


class RunMonitor:
    """Collects elapsed time and resident memory at chosen points."""

    def __init__(self):
        self.process = psutil.Process()
        self.metrics = RunMetrics(start_time=time.time())

    def start(self):
        self.metrics = RunMetrics(start_time=time.time())
        self.sample()

    def sample(self) -> float:
        memory_mb = self.process.memory_info().rss / (1024 * 1024)
        self.metrics.memory_samples.append(memory_mb)
        return memory_mb

    def stop(self):
        self.sample()
        self.metrics.end_time = time.time()

    def get_report(self) -> Dict:
        m = self.metrics
        return {
            'total_time_seconds': m.total_time,
            'peak_memory_mb': m.peak_memory_mb,
            'memory_samples': len(m.memory_samples),
            'start_time': datetime.fromtimestamp(m.start_time).isoformat(),
            'end_time': datetime.fromtimestamp(m.end_time).isoformat() if m.end_time else None,
            'cpu_count': psutil.cpu_count(),
        }
