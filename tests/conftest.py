"""Pytest configuration for the simulator test suite."""

import sys
from pathlib import Path

# the modules live flat in the project root
sys.path.insert(0, str(Path(__file__).parent.parent))
