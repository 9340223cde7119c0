"""Shared BDD fixtures for the pizzeria scenarios."""

import pytest


@pytest.fixture()
def context():
    """Container for values passed between steps."""
    return {"order": None, "outcome": None, "batch": None}
