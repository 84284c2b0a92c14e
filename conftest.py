"""
Root pytest configuration.

This conftest is loaded before test collection to ensure
src is in the Python path for all imports.
"""

import sys
from pathlib import Path

# Add src to path IMMEDIATELY when this file is loaded
src_path = Path(__file__).parent / "src"
src_str = str(src_path.absolute())

# Ensure it's at the very front
if src_str in sys.path:
    sys.path.remove(src_str)
sys.path.insert(0, src_str)


import pytest


@pytest.fixture(autouse=True)
def _reset_wizard_globals():
    """Reset cached settings and the global persistence between tests."""
    yield
    from config.settings import get_submission_settings, get_wizard_settings
    import database.wizard_persistence as persistence_module

    get_wizard_settings.cache_clear()
    get_submission_settings.cache_clear()
    persistence_module._wizard_persistence = None
