"""
Entry point for running the complexity scanner as a module.

Usage:
    python -m complexityscanner ./src
    python -m complexityscanner --help
"""

import sys
from complexityscanner.cli import main

if __name__ == "__main__":
    sys.exit(main())
