"""
Test package for the tuning client.

Unit tests live under ``tests/unit``; in-memory fakes of the service ports
live under ``tests/mocks``.
"""

import sys
from pathlib import Path

# Add source directory to Python path for testing
test_dir = Path(__file__).parent
src_dir = test_dir.parent / "src"

if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))
