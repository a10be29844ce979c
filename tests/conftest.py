import sys, os

# Ensure src is on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from tests.helpers import build_game, capture, indices_by_symbol

__all__ = [
    "build_game",
    "capture",
    "indices_by_symbol",
]
