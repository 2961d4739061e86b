"""Utility functions for the canvas engine."""
from .logger import setup_logger
from .geometry import point_in_polygon, polygon_area, polygon_bounds, find_zone_for_point
from .arrangement import arrange_devices_in_zone, alignment_updates

__all__ = [
    'setup_logger',
    'point_in_polygon',
    'polygon_area',
    'polygon_bounds',
    'find_zone_for_point',
    'arrange_devices_in_zone',
    'alignment_updates',
]
