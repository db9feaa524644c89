"""Command Line Entry Point - Root Module.

This is the root-level entry point for running quakefeed from a checkout.
It imports from the quakefeed package.
"""

import sys

from quakefeed.main import main


if __name__ == "__main__":
    sys.exit(main())
