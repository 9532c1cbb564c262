from __future__ import annotations

import logging

from syringe.introspection import AttributeIntrospector
from syringe.policies import AutowireType, FinishPolicy
from syringe.registry import Registry
from syringe.wiring import Autowirer

logger = logging.getLogger(__name__)


class Syringe(Registry):
    """Register instances and wire them together through their attributes.

    Register everything first, then call ``finish_registration`` to populate
    the unset annotated attributes of each entry from the other entries:

        syringe = Syringe()
        syringe.register("svc", Service())
        syringe.register(Client())
        syringe.finish_registration()

    Attributes are matched by name first and by declared type name second.
    Already populated attributes are left alone unless ``overwrite=True``.
    """

    def __init__(
        self,
        *,
        introspector: AttributeIntrospector | None = None,
        finish_policy: FinishPolicy = FinishPolicy.ABORT,
        overwrite: bool = False,
    ) -> None:
        """Initialize an empty syringe.

        Args:
            introspector: Attribute capability used for wiring. Defaults to
                class-annotation based introspection.
            finish_policy: ``ABORT`` propagates the first wiring failure of
                ``finish_registration``; ``COLLECT`` wires every entry and raises
                all failures together.
            overwrite: Also wire attributes that already hold a value.

        """
        super().__init__()
        self._autowirer = Autowirer(
            self,
            introspector,
            finish_policy=finish_policy,
            overwrite=overwrite,
        )

    def autowire(self, instance: object, strategy: AutowireType = AutowireType.BY_NAME) -> None:
        """Wire a single object, registered or not.

        Args:
            instance: Object whose unset attributes should be populated.
            strategy: ``BY_NAME`` (name, then type name) or ``BY_TYPE`` (type name only).

        Raises:
            SyringeAssignmentError: If a match is incompatible with its attribute.

        """
        self._autowirer.autowire(instance, strategy)

    def finish_registration(self) -> None:
        """Wire every registered entry flagged as needing wiring, by name."""
        logger.debug("Finishing registration of %d entries", len(self))
        self._autowirer.finish_registration()
