"""
Module execution entry point.

Allows running with: python -m merklesum_cli
"""

import sys
from merklesum_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
