"""Track Unreal Engine marketplace assets, engines, projects and plugins."""

__version__ = "0.1.0"

__all__ = [
    "asset_data",
    "asset_info",
    "database",
    "engine_data",
    "epic_web",
    "fallback",
    "items",
    "plugin_data",
    "project_data",
]