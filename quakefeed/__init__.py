"""quakefeed - USGS earthquake feed viewer.

Fetches the USGS event feed and formats it into display-ready rows.
"""

__version__ = "1.0.0"
