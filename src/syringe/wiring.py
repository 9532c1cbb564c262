from __future__ import annotations

import logging

from syringe._internal.type_checks import is_instance_compatible
from syringe.exceptions import SyringeAssignmentError, SyringeError, SyringeFinishRegistrationError
from syringe.introspection import AnnotationIntrospector, AttributeIntrospector, DeclaredAttribute
from syringe.policies import AutowireType, FinishPolicy
from syringe.registry import Registry

logger = logging.getLogger(__name__)


class Autowirer:
    """Populate unset attributes of instances from a registry.

    Attributes are visited for every class in the instance's type chain, most
    derived first, so an attribute redeclared by a subclass is visited once per
    declaring class. A key with no registered entry leaves the attribute
    untouched.
    """

    def __init__(
        self,
        registry: Registry,
        introspector: AttributeIntrospector | None = None,
        *,
        finish_policy: FinishPolicy = FinishPolicy.ABORT,
        overwrite: bool = False,
    ) -> None:
        """Initialize the engine.

        Args:
            registry: Store that supplies instances.
            introspector: Attribute capability; ``AnnotationIntrospector`` by default.
            finish_policy: How ``finish_registration`` reacts to wiring failures.
            overwrite: Assign matches to attributes that already hold a value.

        """
        self._registry = registry
        self._introspector: AttributeIntrospector = introspector or AnnotationIntrospector()
        self._finish_policy = FinishPolicy(finish_policy)
        self._overwrite = overwrite

    def autowire(self, instance: object, strategy: AutowireType = AutowireType.BY_NAME) -> None:
        """Wire ``instance`` using the given strategy.

        ``BY_NAME`` tries the attribute name first and falls back to the declared
        type name. ``BY_TYPE`` only tries the declared type name.

        Raises:
            SyringeAssignmentError: If a match cannot be stored in its attribute.
                Attributes after the failing one are not wired.

        """
        strategy = AutowireType(strategy)
        for cls in self._introspector.type_chain(instance):
            for attribute in self._introspector.declared_attributes(cls):
                if not self._overwrite and self._introspector.read(instance, attribute) is not None:
                    continue
                if strategy is AutowireType.BY_NAME:
                    self._autowire_by_name(instance, attribute)
                else:
                    self._autowire_by_type(instance, attribute)

    def finish_registration(self) -> None:
        """Wire every registered entry that needs wiring, by name.

        Wiring is a single pass over a snapshot of the entries. Nothing is
        retried, so an entry wired early sees later entries in whatever state
        they are in at that moment.

        Raises:
            SyringeError: The first failure, with ``FinishPolicy.ABORT``.
            SyringeFinishRegistrationError: All failures, with ``FinishPolicy.COLLECT``.

        """
        failures: list[tuple[str, SyringeError]] = []
        for entry in self._registry.entries():
            if not entry.needs_wiring:
                continue
            try:
                self.autowire(entry.instance, AutowireType.BY_NAME)
            except SyringeError as exc:
                if self._finish_policy is FinishPolicy.ABORT:
                    raise
                logger.debug("Wiring %r failed: %s", entry.key, exc)
                failures.append((entry.key, exc))

        if failures:
            raise SyringeFinishRegistrationError(tuple(failures))

    def _autowire_by_name(self, instance: object, attribute: DeclaredAttribute) -> None:
        if not self._wire(instance, attribute, attribute.name):
            self._autowire_by_type(instance, attribute)

    def _autowire_by_type(self, instance: object, attribute: DeclaredAttribute) -> None:
        if attribute.type_name is not None:
            self._wire(instance, attribute, attribute.type_name)

    def _wire(self, instance: object, attribute: DeclaredAttribute, key: str) -> bool:
        entry = self._registry.lookup(key)
        if entry is None:
            return False

        value = entry.instance
        if not is_instance_compatible(value, attribute.annotation):
            reason = f"{type(value).__name__} is not compatible with {attribute.annotation!r}"
            raise SyringeAssignmentError(key, attribute.name, instance, reason)
        try:
            self._introspector.write(instance, attribute, value)
        except (AttributeError, TypeError) as exc:
            raise SyringeAssignmentError(key, attribute.name, instance, str(exc)) from exc

        logger.debug(
            "Wired %r into %s.%s",
            key,
            attribute.declaring_type.__qualname__,
            attribute.name,
        )
        return True
