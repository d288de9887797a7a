"""Allow `python -m cuttagflow`."""

import sys

from cuttagflow.cli import main

if __name__ == "__main__":
    sys.exit(main())
