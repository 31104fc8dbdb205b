from .run_manager import RunManager, export_results, to_builtin
from .display import format_telemetry

__all__ = [
    'RunManager',
    'export_results',
    'to_builtin',
    'format_telemetry',
]
