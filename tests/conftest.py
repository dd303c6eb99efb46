import sys
from pathlib import Path

import pytest

# Ensure the package is importable when tests run from a source checkout
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
	sys.path.insert(0, str(PROJECT_ROOT))

from album_activity.infra import postgres


@pytest.fixture(autouse=True)
def reset_pool():
	"""Keep the module-level pool from leaking between tests."""
	postgres.set_pool(None)
	try:
		yield
	finally:
		postgres.set_pool(None)
