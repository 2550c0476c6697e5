"""Entry point for `python -m daypicker` command."""

import sys

from daypicker.cli import main

if __name__ == "__main__":
    sys.exit(main())
