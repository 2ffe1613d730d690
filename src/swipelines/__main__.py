"""
Run with: python -m swipelines
"""
import sys

from swipelines.main import main

if __name__ == "__main__":
    sys.exit(main())
