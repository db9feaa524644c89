"""Connectivity check - Imperative Shell.

Probes the USGS host before a fetch so that "no connection" can be
reported separately from a failed or empty fetch.
"""

import logging
from urllib.parse import urlsplit

import requests

from quakefeed.core.query import USGS_API_BASE


logger = logging.getLogger(__name__)


# Probe timeout (seconds)
DEFAULT_PROBE_TIMEOUT = 5


def has_connectivity(
    url: str = USGS_API_BASE,
    timeout: float = DEFAULT_PROBE_TIMEOUT,
) -> bool:
    """Check whether the host serving url is reachable.

    Any HTTP response counts as connected, whatever its status code.

    Args:
        url: Endpoint whose host is probed
        timeout: Probe timeout in seconds

    Returns:
        True if the host answered, False if the probe failed for any reason
    """
    parts = urlsplit(url)
    probe_url = f"{parts.scheme}://{parts.netloc}/"

    try:
        requests.head(probe_url, timeout=timeout, allow_redirects=False)
    except requests.Timeout:
        logger.warning("Connectivity probe to %s timed out", probe_url)
        return False
    except requests.RequestException as e:
        logger.warning("No connectivity to %s: %s", probe_url, str(e))
        return False

    return True
