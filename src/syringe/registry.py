from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, TypeVar, overload

from syringe._internal.type_checks import is_instance_compatible, is_protocol, is_runtime_class
from syringe.exceptions import (
    SyringeInstantiationError,
    SyringeInvalidKeyError,
    SyringeNotFoundError,
    SyringeTypeMismatchError,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)
_MISSING: Any = object()

_SettingsBase: type[Any] | None = None
try:
    from pydantic_settings import BaseSettings as _SettingsBase
except ImportError:  # pragma: no cover - pydantic-settings is an optional extra
    pass


def _is_settings_class(concrete_type: type[Any]) -> bool:
    return _SettingsBase is not None and issubclass(concrete_type, _SettingsBase)


@dataclass(frozen=True, slots=True)
class Entry:
    """A registered instance and whether bulk wiring should visit it."""

    key: str
    """Unique key within the registry."""

    instance: object
    """The registered object, stored by reference."""

    needs_wiring: bool = True
    """``False`` when the instance comes prewired and ``finish_registration`` must skip it."""


def instantiate(concrete_type: type[T]) -> T:
    """Build an instance of ``concrete_type`` through its zero-argument initializer.

    Args:
        concrete_type: Class to instantiate.

    Returns:
        The new instance.

    Raises:
        SyringeInstantiationError: If ``concrete_type`` is not a concrete class,
            cannot be called without arguments, or is a settings class whose
            environment fails validation.

    """
    if not is_runtime_class(concrete_type):
        raise SyringeInstantiationError(concrete_type, "not a class")
    if is_protocol(concrete_type):
        raise SyringeInstantiationError(concrete_type, "protocols cannot be instantiated")
    if inspect.isabstract(concrete_type):
        raise SyringeInstantiationError(concrete_type, "abstract class")

    if _is_settings_class(concrete_type):
        # Required settings fields come from the environment, not from arguments.
        try:
            return concrete_type()
        except ValueError as exc:
            raise SyringeInstantiationError(concrete_type, f"invalid settings: {exc}") from exc

    try:
        signature = inspect.signature(concrete_type)
    except (TypeError, ValueError):
        signature = None
    if signature is not None:
        try:
            signature.bind()
        except TypeError as exc:
            raise SyringeInstantiationError(
                concrete_type,
                f"initializer requires arguments ({exc})",
            ) from exc
        return concrete_type()

    # No signature metadata (builtins, C extensions): the call itself is the check.
    try:
        return concrete_type()
    except TypeError as exc:
        raise SyringeInstantiationError(concrete_type, f"no zero-argument initializer ({exc})") from exc


class Registry:
    """Store of registered instances keyed by string.

    Keys are unique and the last registration under a key wins. Instances are
    kept by reference and returned as-is. The registry has no locking and
    expects a single writer.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Entry] = {}

    @overload
    def register(self, key: str, instance: object, *, needs_wiring: bool = ...) -> None: ...

    @overload
    def register(self, key: type[Any], instance: object, *, needs_wiring: bool = ...) -> None: ...

    @overload
    def register(self, instance: object, *, needs_wiring: bool = ...) -> None: ...

    def register(
        self,
        key: Any,
        instance: Any = _MISSING,
        *,
        needs_wiring: bool = True,
    ) -> None:
        """Register an instance, replacing any entry already stored under the key.

        Example:
          registry.register("db", Database())
          registry.register(Database())  # key "Database"
          registry.register(AbstractDatabase, SqliteDatabase())  # key "AbstractDatabase"

        Args:
            key: String key, a class whose name becomes the key, or the instance
                itself when ``instance`` is omitted.
            instance: The object to register.
            needs_wiring: Set to ``False`` for prewired instances that
                ``finish_registration`` should skip.

        """
        if instance is _MISSING:
            if is_runtime_class(key):
                msg = (
                    f"Cannot register class {key.__name__} without an instance. "
                    f"Use register_type({key.__name__}) to instantiate and register it."
                )
                raise SyringeInvalidKeyError(msg)
            key, instance = type(key).__name__, key
        else:
            key = self._normalize_key(key)
        self._entries[key] = Entry(key=key, instance=instance, needs_wiring=needs_wiring)
        logger.debug("Registered %s under %r (needs_wiring=%s)", type(instance).__name__, key, needs_wiring)

    @overload
    def register_type(self, concrete_type: type[T], *, needs_wiring: bool = ...) -> T: ...

    @overload
    def register_type(self, key: str, concrete_type: type[T], *, needs_wiring: bool = ...) -> T: ...

    def register_type(
        self,
        key: Any,
        concrete_type: Any = None,
        *,
        needs_wiring: bool = True,
    ) -> Any:
        """Instantiate a class with no arguments and register the result.

        The key defaults to the class name.

        Returns:
            The registered instance.

        Raises:
            SyringeInstantiationError: If the class cannot be default-constructed.

        """
        if concrete_type is None:
            concrete_type = key
            if not is_runtime_class(concrete_type):
                raise SyringeInstantiationError(concrete_type, "not a class")
            key = concrete_type.__name__
        elif not isinstance(key, str):
            msg = f"Registration key must be a string, got {type(key).__name__}"
            raise SyringeInvalidKeyError(msg)

        instance = instantiate(concrete_type)
        self.register(key, instance, needs_wiring=needs_wiring)
        return instance

    @overload
    def get(self, key: type[T]) -> T: ...

    @overload
    def get(self, key: str) -> object: ...

    def get(self, key: str | type[Any]) -> object:
        """Return the instance registered under a key or a class name.

        Raises:
            SyringeNotFoundError: If nothing is registered under the key.
            SyringeTypeMismatchError: If ``key`` is a class and the stored
                instance is not an instance of it.

        """
        if isinstance(key, str):
            return self._get_entry(key).instance

        lookup_key = self._normalize_key(key)
        instance = self._get_entry(lookup_key).instance
        if not is_instance_compatible(instance, key):
            raise SyringeTypeMismatchError(lookup_key, key, instance)
        return instance

    def lookup(self, key: str) -> Entry | None:
        """Return the entry for ``key`` or ``None``; never raises."""
        return self._entries.get(key)

    def entries(self) -> tuple[Entry, ...]:
        """Return a snapshot of the registered entries."""
        return tuple(self._entries.values())

    def clear(self) -> None:
        """Drop every entry. Registered instances are not touched."""
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def _get_entry(self, key: str) -> Entry:
        entry = self._entries.get(key)
        if entry is None:
            raise SyringeNotFoundError(key)
        return entry

    def _normalize_key(self, key: object) -> str:
        if isinstance(key, str):
            return key
        if is_runtime_class(key):
            return key.__name__
        msg = f"Key must be a string or a class, got {key!r}"
        raise SyringeInvalidKeyError(msg)
