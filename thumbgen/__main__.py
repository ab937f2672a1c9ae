"""
Main entry point for running the package as a module.

Usage:
    python -m thumbgen serve --port 8000
    python -m thumbgen process photo.jpg
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
