"""
GPS API Views Package
"""
from .receiver import add_point
from .history import get_history, get_last_position
from .live import live_stream
from .maintenance import reset_points, list_sessions
from .export import export_track

__all__ = [
    'add_point',
    'get_history',
    'get_last_position',
    'live_stream',
    'reset_points',
    'list_sessions',
    'export_track',
]
