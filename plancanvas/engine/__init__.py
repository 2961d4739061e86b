"""Canvas engine and its configuration."""
from .canvas_engine import CanvasEngine
from .config import DEFAULT_CONFIG, DEFAULT_THEME, merge_config

__all__ = [
    'CanvasEngine',
    'DEFAULT_CONFIG',
    'DEFAULT_THEME',
    'merge_config',
]
