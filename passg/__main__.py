#!/usr/bin/env python3
"""Entry point for `python -m passg`."""

import sys

from passg.cli import main

if __name__ == '__main__':
    sys.exit(main())
