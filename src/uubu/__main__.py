#!/usr/bin/env python3
"""uubu - Module entry point."""
import sys

from uubu.cli import main

if __name__ == "__main__":
    sys.exit(main())
