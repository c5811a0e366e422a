"""
Pytest configuration.

Adds the repository root to the Python path so tests can import 'ecmfactor'
without installing it.
"""
import sys
from pathlib import Path

root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))
