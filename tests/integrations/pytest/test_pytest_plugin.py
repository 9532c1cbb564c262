from __future__ import annotations

from syringe import Syringe
from syringe.container_context import syringe_context

pytest_plugins = ["syringe.integrations.pytest_plugin"]


class _Service:
    pass


class _Client:
    service: _Service | None = None


def test_syringe_fixture_provides_empty_syringe(syringe: Syringe) -> None:
    assert isinstance(syringe, Syringe)
    assert len(syringe) == 0


def test_syringe_fixture_is_usable_for_wiring(syringe: Syringe) -> None:
    service = _Service()
    client = _Client()
    syringe.register(service)
    syringe.register(client)

    syringe.finish_registration()

    assert client.service is service


def test_global_syringe_fixture_is_the_shared_instance(global_syringe: Syringe) -> None:
    assert global_syringe is syringe_context.get_instance()
    global_syringe.register("leaked", _Service())


def test_shared_instance_is_cleared_between_tests() -> None:
    assert syringe_context.has_instance is False
