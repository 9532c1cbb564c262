from __future__ import annotations

import types
from typing import Annotated, Any, ClassVar, ForwardRef, TypeGuard, TypeVar, Union, get_args, get_origin

_NONE_TYPE = type(None)


def is_runtime_class(candidate: object) -> TypeGuard[type[Any]]:
    """Return true when candidate is a runtime class safe for class-only operations.

    Args:
        candidate: Value being checked for eligibility or runtime type constraints.

    """
    return isinstance(candidate, type) and not isinstance(candidate, types.GenericAlias)


def is_protocol(candidate: object) -> bool:
    """Return true when candidate is a ``typing.Protocol`` definition.

    Concrete classes that merely inherit from a protocol are not protocols.
    """
    return is_runtime_class(candidate) and bool(getattr(candidate, "_is_protocol", False))


def is_class_var(annotation: object) -> bool:
    """Return true for ``ClassVar`` annotations, evaluated or left as strings."""
    if annotation is ClassVar or get_origin(annotation) is ClassVar:
        return True
    return isinstance(annotation, str) and annotation.startswith(("ClassVar", "typing.ClassVar"))


def _is_union(annotation: object) -> bool:
    return get_origin(annotation) in (Union, types.UnionType)


def _strip_annotated(annotation: Any) -> Any:
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def unwrap_annotation(annotation: Any) -> Any:
    """Strip ``Annotated`` metadata and a single ``Optional`` wrapper.

    Unions with more than one non-``None`` member are returned unchanged.
    """
    annotation = _strip_annotated(annotation)
    if _is_union(annotation):
        members = [member for member in get_args(annotation) if member is not _NONE_TYPE]
        if len(members) == 1:
            return unwrap_annotation(members[0])
    return annotation


def _split_top_level(text: str, separator: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    start = 0
    for index, char in enumerate(text):
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif char == separator and depth == 0:
            parts.append(text[start:index].strip())
            start = index + 1
    parts.append(text[start:].strip())
    return parts


def _type_name_from_string(annotation: str) -> str | None:  # noqa: PLR0911
    # Mirrors type_name_of for annotations that could not be evaluated.
    members = [
        member
        for member in _split_top_level(annotation.strip().strip("'\"").strip(), "|")
        if member != "None"
    ]
    if len(members) != 1:
        return None

    head, bracket, arguments = members[0].partition("[")
    name = head.strip().rsplit(".", 1)[-1]
    if bracket:
        if not arguments.endswith("]"):
            return None
        arguments = arguments[:-1]
        if name in ("Optional", "Annotated"):
            return _type_name_from_string(_split_top_level(arguments, ",")[0])
        if name == "Union":
            return _type_name_from_string(" | ".join(_split_top_level(arguments, ",")))
    if name == "Any":
        return None
    return name if name.isidentifier() else None


def type_name_of(annotation: Any) -> str | None:
    """Return the registry key derived from a declared attribute type.

    Args:
        annotation: Evaluated annotation, or the raw string when evaluation failed.

    Returns:
        The simple class name, or ``None`` when the annotation names no single class.

    """
    annotation = unwrap_annotation(annotation)
    if isinstance(annotation, ForwardRef):
        annotation = annotation.__forward_arg__
    if isinstance(annotation, str):
        return _type_name_from_string(annotation)
    if annotation is Any or _is_union(annotation):
        return None
    origin = get_origin(annotation)
    if origin is not None:
        return origin.__name__ if is_runtime_class(origin) else None
    if is_runtime_class(annotation):
        return annotation.__name__
    return None


def is_instance_compatible(value: object, annotation: Any) -> bool:  # noqa: PLR0911
    """Return whether ``value`` may be stored under ``annotation``.

    Checks are best effort: annotations that cannot be tested at runtime
    (``Any``, type variables, unevaluated strings, non runtime-checkable
    protocols) accept every value.
    """
    annotation = _strip_annotated(annotation)
    if annotation is Any or isinstance(annotation, (str, ForwardRef, TypeVar)):
        return True
    if annotation is None or annotation is _NONE_TYPE:
        return value is None
    if _is_union(annotation):
        return any(is_instance_compatible(value, member) for member in get_args(annotation))
    origin = get_origin(annotation)
    if origin is not None:
        return is_instance_compatible(value, origin) if is_runtime_class(origin) else True
    if not is_runtime_class(annotation):
        return True
    if is_protocol(annotation) and not getattr(annotation, "_is_runtime_protocol", False):
        return True
    return isinstance(value, annotation)


__all__ = [
    "is_class_var",
    "is_instance_compatible",
    "is_protocol",
    "is_runtime_class",
    "type_name_of",
    "unwrap_annotation",
]
