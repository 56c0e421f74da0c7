"""
Configuration layer - Settings and constants
"""

from waltz.config.settings import settings, DatabaseConfig, PROJECT_ROOT, LOG_DIR
from waltz.config.constants import API_PREFIX, SERVICE_NAME, FIXTURE_NAME_PREFIX

__all__ = [
    "settings",
    "DatabaseConfig",
    "PROJECT_ROOT",
    "LOG_DIR",
    "API_PREFIX",
    "SERVICE_NAME",
    "FIXTURE_NAME_PREFIX",
]
