"""
Entry point for module execution (``python -m ktbridge``).
"""

import sys

from ktbridge.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
