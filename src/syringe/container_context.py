from __future__ import annotations

from collections.abc import Callable

from syringe.container import Syringe


class SyringeContext:
    """Holder of one process-wide ``Syringe`` with an explicit lifecycle.

    The instance is created lazily on first ``get_instance`` call and lives until
    ``clear_instance``. The binding is process-global. It is not task-local or
    thread-local.
    """

    def __init__(self, factory: Callable[[], Syringe] = Syringe) -> None:
        self._factory = factory
        self._syringe: Syringe | None = None

    def get_instance(self) -> Syringe:
        """Return the shared syringe, creating it on first use."""
        if self._syringe is None:
            self._syringe = self._factory()
        return self._syringe

    def set_instance(self, syringe: Syringe) -> None:
        """Replace the shared syringe, for example with a differently configured one."""
        self._syringe = syringe

    def clear_instance(self) -> None:
        """Forget the shared syringe so the next ``get_instance`` call builds a new one."""
        self._syringe = None

    @property
    def has_instance(self) -> bool:
        return self._syringe is not None


syringe_context = SyringeContext()


def get_instance() -> Syringe:
    """Return the process-wide syringe held by ``syringe_context``."""
    return syringe_context.get_instance()


def clear_instance() -> None:
    """Drop the process-wide syringe held by ``syringe_context``."""
    syringe_context.clear_instance()
