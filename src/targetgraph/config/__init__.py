"""
targetgraph configuration.

Environment-driven application settings (TARGETGRAPH_* variables, .env).
"""

from targetgraph.config.settings import AppSettings, get_settings

__all__ = [
    "AppSettings",
    "get_settings",
]
