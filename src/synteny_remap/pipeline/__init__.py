from .main_pipeline import main, run_postnuc, setup_logging
from .flush_controller import ControllerState, RunStatistics, FlushController
from .processors import SyntenyProcessor, SummaryProcessor

# Alias for convenience
run_pipeline = main

__all__ = [
    'main',
    'run_pipeline',
    'run_postnuc',
    'setup_logging',
    'ControllerState',
    'RunStatistics',
    'FlushController',
    'SyntenyProcessor',
    'SummaryProcessor',
]
