from __future__ import annotations

from typing import Any


class SyringeError(Exception):
    """Represent a base class for all Syringe-specific failures.

    Catch this type when you want to handle any Syringe error path without
    matching each concrete exception class individually.
    """


class SyringeInstantiationError(SyringeError):
    """Signal that a registered type cannot be default-constructed.

    Raised by ``Syringe.register_type`` when the given object is not a class, the
    class is abstract, its initializer requires arguments, or a Pydantic settings
    class fails to validate its environment.

    Typical fixes include giving every initializer parameter a default, building
    the instance yourself and calling ``Syringe.register``, or providing the
    missing settings environment variables.
    """

    def __init__(self, concrete_type: Any, reason: str) -> None:
        self.concrete_type = concrete_type
        name = getattr(concrete_type, "__name__", repr(concrete_type))
        super().__init__(f"Cannot instantiate {name}: {reason}")


class SyringeNotFoundError(SyringeError, KeyError):
    """Signal that a lookup key has no registered entry.

    Raised by ``Syringe.get`` only. Wiring never raises it, a missing match
    during wiring leaves the attribute untouched.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"No instance is registered under key {self.key!r}"


class SyringeTypeMismatchError(SyringeError, TypeError):
    """Signal that a typed lookup found an instance of an incompatible type.

    Raised by ``Syringe.get(cls)`` when the instance stored under
    ``cls.__name__`` is not an instance of ``cls``. Two unrelated classes that
    share a ``__name__`` also end up here.
    """

    def __init__(self, key: str, expected_type: type[Any], instance: object) -> None:
        self.key = key
        self.expected_type = expected_type
        self.instance = instance
        super().__init__(
            f"Instance registered under {key!r} is {type(instance).__name__}, "
            f"not {expected_type.__name__}",
        )


class SyringeAssignmentError(SyringeError, TypeError):
    """Signal that a resolved instance cannot be assigned to an attribute.

    Raised by ``Syringe.autowire`` and ``Syringe.finish_registration`` when the
    instance found under ``key`` does not match the attribute's declared type, or
    when the attribute refuses assignment (for example a read-only property).

    Typical fixes include registering a compatible instance, renaming the
    attribute so it no longer collides with an unrelated key, or declaring a wider
    attribute type.
    """

    def __init__(self, key: str, attribute: str, instance: object, reason: str) -> None:
        self.key = key
        self.attribute = attribute
        self.instance = instance
        super().__init__(f"Cannot wire {key!r} into attribute {attribute!r}: {reason}")


class SyringeFinishRegistrationError(SyringeError):
    """Aggregate the wiring failures of one ``finish_registration`` pass.

    Raised only with ``FinishPolicy.COLLECT``. ``failures`` holds ``(key, error)``
    pairs in the order the entries were processed.
    """

    def __init__(self, failures: tuple[tuple[str, SyringeError], ...]) -> None:
        self.failures = failures
        keys = ", ".join(repr(key) for key, _ in failures)
        super().__init__(f"Wiring failed for {len(failures)} entries: {keys}")


class SyringeInvalidKeyError(SyringeError, TypeError):
    """Signal a registration or lookup key that is neither a string nor a class.

    Raised by ``Syringe.register``, ``Syringe.register_type`` and ``Syringe.get``.
    """
