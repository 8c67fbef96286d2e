"""
Entry point for running checkhealth as a module.

Usage:
    python3 -m checkhealth [names...] [options]
"""

import sys

from .cli.main import main

if __name__ == "__main__":
    sys.exit(main())
