"""Entry point for ``python -m hdnetworks``."""

import sys

from hdnetworks.cli import main

if __name__ == "__main__":
    sys.exit(main())
