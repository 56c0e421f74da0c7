"""
Application constants

Centralized constants used across the application.
"""

# ============================================================================
# API
# ============================================================================

API_PREFIX = "/api/aggregate-overlay-diagram"

SERVICE_NAME = "waltz-overlay-api"


# ============================================================================
# Test fixtures / naming
# ============================================================================

# Prefix used by fixture helpers when generating unique names and user ids
FIXTURE_NAME_PREFIX = "test"
