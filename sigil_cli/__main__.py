"""
Module execution entry point.

Allows running with: python -m sigil_cli
"""

import sys
from sigil_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
