"""
Entry point for module execution (``python -m typify``).

This module delegates execution to the CLI handler in ``typify.cli.__main__``.
"""

import sys
from typify.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
