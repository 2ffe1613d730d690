"""
Development runner: starts SwipeLines from a source checkout.

Puts 'src' on sys.path so 'swipelines' imports without `pip install -e .`.

Usage:
    $ python run.py
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from swipelines.main import main

if __name__ == "__main__":
    sys.exit(main())
