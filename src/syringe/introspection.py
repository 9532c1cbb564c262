"""Attribute introspection used by the wiring engine.

The engine never touches ``__dict__`` or annotations directly. It asks an
``AttributeIntrospector`` for the class chain of an instance, the attributes
each class declares, and how to read and write them. ``AnnotationIntrospector``
is the default and treats every non-``ClassVar`` class annotation as a
declared attribute.
"""

from __future__ import annotations

import inspect
import logging
import sys
from dataclasses import dataclass
from typing import Any, Protocol

from syringe._internal.type_checks import is_class_var, type_name_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeclaredAttribute:
    """An attribute declared directly by one class."""

    name: str
    """Name as written in the class body; used as the by-name lookup key."""

    storage_name: str
    """Name the value is stored under, after private name mangling."""

    annotation: Any
    """Declared type, or the raw string when it could not be evaluated."""

    type_name: str | None
    """Lookup key for by-type wiring, ``None`` when the annotation names no single class."""

    declaring_type: type[Any]
    """Class whose body declares the attribute."""


class AttributeIntrospector(Protocol):
    """Capability the wiring engine consumes to inspect and mutate instances."""

    def type_chain(self, instance: object) -> tuple[type[Any], ...]:
        """Return the concrete class of ``instance`` followed by its ancestors."""
        ...

    def declared_attributes(self, cls: type[Any]) -> tuple[DeclaredAttribute, ...]:
        """Return attributes declared by ``cls`` itself, in declaration order."""
        ...

    def read(self, instance: object, attribute: DeclaredAttribute) -> Any:
        """Return the current value, or ``None`` when the attribute is unset."""
        ...

    def write(self, instance: object, attribute: DeclaredAttribute, value: object) -> None:
        """Store ``value`` regardless of the attribute's visibility."""
        ...


class AnnotationIntrospector:
    """Introspect instances through the annotations of their classes."""

    def __init__(self) -> None:
        self._attributes_cache: dict[type[Any], tuple[DeclaredAttribute, ...]] = {}

    def type_chain(self, instance: object) -> tuple[type[Any], ...]:
        return type(instance).__mro__

    def declared_attributes(self, cls: type[Any]) -> tuple[DeclaredAttribute, ...]:
        cached = self._attributes_cache.get(cls)
        if cached is not None:
            return cached

        attributes = tuple(
            DeclaredAttribute(
                name=_demangle(cls, storage_name),
                storage_name=storage_name,
                annotation=annotation,
                type_name=type_name_of(annotation),
                declaring_type=cls,
            )
            for storage_name, annotation in _get_own_annotations(cls).items()
            if not is_class_var(annotation)
        )
        self._attributes_cache[cls] = attributes
        return attributes

    def read(self, instance: object, attribute: DeclaredAttribute) -> Any:
        return getattr(instance, attribute.storage_name, None)

    def write(self, instance: object, attribute: DeclaredAttribute, value: object) -> None:
        # Skips custom __setattr__ hooks, including frozen dataclasses.
        object.__setattr__(instance, attribute.storage_name, value)


def _get_own_annotations(cls: type[Any]) -> dict[str, Any]:
    try:
        return inspect.get_annotations(cls, eval_str=True)
    except NameError as exc:
        logger.warning(
            "'%s' name error evaluating %s annotations, falling back to raw annotations",
            exc.name,
            cls.__qualname__,
        )
    except (AttributeError, SyntaxError, TypeError) as exc:
        logger.warning(
            "Cannot evaluate %s annotations (%s), falling back to raw annotations",
            cls.__qualname__,
            exc,
        )
    return _get_raw_annotations(cls)


if sys.version_info >= (3, 14):
    import annotationlib

    def _get_raw_annotations(cls: type[Any]) -> dict[str, Any]:
        # Evaluating lazily defined annotations can fail again; read them as source strings.
        return annotationlib.get_annotations(cls, format=annotationlib.Format.STRING)

else:

    def _get_raw_annotations(cls: type[Any]) -> dict[str, Any]:
        return inspect.get_annotations(cls)


def _demangle(cls: type[Any], storage_name: str) -> str:
    prefix = f"_{cls.__name__.lstrip('_')}__"
    if storage_name.startswith(prefix) and not storage_name.endswith("__"):
        return "__" + storage_name[len(prefix) :]
    return storage_name


__all__ = ["AnnotationIntrospector", "AttributeIntrospector", "DeclaredAttribute"]
