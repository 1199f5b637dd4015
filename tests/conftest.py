"""Shared pytest fixtures.

Seeds the biolink predicate cache with a small in-memory model so no test
reaches GitHub, and resets module singletons between tests.
"""

import pytest

from biograph_records.config.settings import reset_settings
from biograph_records.utils.biolink_predicates import reset_biolink_cache, set_biolink_model
from fixtures import BIOLINK_TEST_MODEL


@pytest.fixture(autouse=True)
def biolink_model():
    """Offline biolink model for predicate inversion."""
    set_biolink_model(BIOLINK_TEST_MODEL)
    yield BIOLINK_TEST_MODEL
    reset_biolink_cache()
    reset_settings()
