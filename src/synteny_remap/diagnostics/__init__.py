from .performance import RunMetrics, RunMonitor
from .validation import validate_inputs

__all__ = [
    'RunMetrics',
    'RunMonitor',
    'validate_inputs',
]
