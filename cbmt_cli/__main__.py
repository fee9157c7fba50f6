"""
Module execution entry point.

Allows running with: python -m cbmt_cli
"""

import sys
from cbmt_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
