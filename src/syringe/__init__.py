"""Object registry with attribute autowiring.

Register instances by name or by class, then let Syringe populate the unset
annotated attributes of those instances with other registered instances,
matched by attribute name or by declared attribute type.
"""

from syringe.container import Syringe
from syringe.container_context import SyringeContext, clear_instance, get_instance, syringe_context
from syringe.exceptions import (
    SyringeAssignmentError,
    SyringeError,
    SyringeFinishRegistrationError,
    SyringeInstantiationError,
    SyringeInvalidKeyError,
    SyringeNotFoundError,
    SyringeTypeMismatchError,
)
from syringe.introspection import AnnotationIntrospector, AttributeIntrospector, DeclaredAttribute
from syringe.policies import AutowireType, FinishPolicy
from syringe.registry import Entry, Registry
from syringe.wiring import Autowirer

__all__ = [
    "AnnotationIntrospector",
    "AttributeIntrospector",
    "AutowireType",
    "Autowirer",
    "DeclaredAttribute",
    "Entry",
    "FinishPolicy",
    "Registry",
    "Syringe",
    "SyringeAssignmentError",
    "SyringeContext",
    "SyringeError",
    "SyringeFinishRegistrationError",
    "SyringeInstantiationError",
    "SyringeInvalidKeyError",
    "SyringeNotFoundError",
    "SyringeTypeMismatchError",
    "clear_instance",
    "get_instance",
    "syringe_context",
]
