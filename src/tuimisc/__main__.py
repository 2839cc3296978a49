"""Entry point for the tuimisc CLI."""

import sys

from tuimisc.cli import main

if __name__ == "__main__":
    sys.exit(main())
