"""Entry point for ``python -m githelper``."""

import sys

from githelper.cli import main

if __name__ == "__main__":
    sys.exit(main())
