"""
Application version management.

Single source of truth for the version reported by the health endpoints
and the tool-server manifests.
"""

import os

APP_VERSION = "1.0.0"

BUILD_SHA = os.environ.get("BUILD_SHA", "dev")


def get_full_version() -> str:
    """Get full version string including build metadata."""
    if BUILD_SHA != "dev":
        return f"{APP_VERSION}+{BUILD_SHA[:8]}"
    return APP_VERSION
