"""Shared pytest fixtures for syringe tests."""

import pytest

from syringe.container import Syringe
from syringe.policies import FinishPolicy
from syringe.registry import Registry


@pytest.fixture()
def registry() -> Registry:
    """Bare registry without a wiring engine."""
    return Registry()


@pytest.fixture()
def container() -> Syringe:
    """Default syringe: abort on the first finish failure, keep populated attributes."""
    return Syringe()


@pytest.fixture()
def collecting_container() -> Syringe:
    """Syringe that wires every entry before reporting failures."""
    return Syringe(finish_policy=FinishPolicy.COLLECT)
