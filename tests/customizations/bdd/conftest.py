"""Shared BDD fixtures for the checkout customizations context."""

import pytest


@pytest.fixture()
def rules():
    return []


@pytest.fixture()
def tiers():
    return []


@pytest.fixture()
def groups():
    return []
