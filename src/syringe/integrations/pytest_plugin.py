from __future__ import annotations

from collections.abc import Iterator

import pytest

from syringe.container import Syringe
from syringe.container_context import syringe_context


@pytest.fixture()
def syringe() -> Syringe:
    """Create a per-test syringe.

    The fixture is function-scoped, so registrations are isolated between tests
    unless users override the fixture scope explicitly.

    Returns:
        A new, empty ``Syringe``.

    """
    return Syringe()


@pytest.fixture()
def global_syringe() -> Syringe:
    """Return the process-wide syringe; it is cleared again after the test."""
    return syringe_context.get_instance()


@pytest.fixture(autouse=True)
def _syringe_context_reset() -> Iterator[None]:
    """Clear the process-wide syringe after every test."""
    yield
    syringe_context.clear_instance()
