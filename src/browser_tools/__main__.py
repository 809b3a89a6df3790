"""Allow ``python -m browser_tools <command>``."""

import sys

from browser_tools.cli import main

if __name__ == "__main__":
    sys.exit(main())
