"""Default configuration for the canvas engine."""

# Default configuration
DEFAULT_CONFIG = {
    "viewport_width": 800,
    "viewport_height": 600,
    "wheel_zoom_in": 1.1,
    "wheel_zoom_out": 0.9,
    "key_zoom_in": 1.2,
    "key_zoom_out": 0.8,
    "lasso_tolerance": 5.0,
    "lasso_min_size": 5.0,
    "cull_padding": 200.0,
    "device_hit_radius": 16.0,
    "vertex_hit_radius": 8.0,
    "person_hit_radius": 14.0,
    "min_zone_area": 1e-4,
    "rotate_step_degrees": 90.0,
    "arrange_padding": 0.02,
    # Capability flags
    "show_zones": True,
    "show_people": True,
    "cull_devices": True,
    "tooltip_detail_level": "detailed",  # minimal, detailed
    "tooltip": {
        "width": 300.0,
        "padding": 16.0,
        "line_height": 18.0,
        "font_size": 12.0,
        "header_height": 40.0,
        "divider_height": 2.0,
        "section_spacing": 8.0,
        "sub_header_height": 20.0,
        "sub_item_height": 20.0,
        "max_sub_items": 5,
    },
    "person_tooltip_width": {"minimal": 200.0, "detailed": 240.0},
    "logger_level": 20,  # logging.INFO
}

# Colour tokens used by the render layers; replaced wholesale by set_theme
DEFAULT_THEME = {
    "primary": "#4c7dff",
    "accent": "#f97316",
    "success": "#22c55e",
    "muted": "#9ca3af",
    "text": "#ffffff",
    "fixture": "#e5e7eb",
    "border": "#111827",
    "selection": "#4c7dff",
    "lasso_fill": "rgba(76, 125, 255, 0.15)",
    "handle": "#ffffff",
    "handle_active": "#f97316",
    "person": "#a855f7",
    "tooltip_bg": "rgba(17, 24, 39, 0.98)",
    "tooltip_text": "#f9fafb",
    "tooltip_border": "#374151",
}


def merge_config(config=None):
    """Overlay a user config on the defaults; nested dicts are merged one level deep."""
    merged = {k: (dict(v) if isinstance(v, dict) else v) for k, v in DEFAULT_CONFIG.items()}
    for key, value in (config or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key].update(value)
        else:
            merged[key] = value
    return merged
