"""
Entry point for module execution (``python -m slimport``).

This module delegates execution to the CLI handler in ``slimport.cli.__main__``.
"""

import sys
from slimport.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
