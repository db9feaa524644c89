"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- USGS API client (HTTP)
- Connectivity probe (HTTP)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from quakefeed.shell.usgs_client import USGSClient, FetchResult, FetchStatus
from quakefeed.shell.connectivity import has_connectivity
from quakefeed.shell.config_loader import load_config, load_config_from_env

__all__ = [
    "USGSClient",
    "FetchResult",
    "FetchStatus",
    "has_connectivity",
    "load_config",
    "load_config_from_env",
]
