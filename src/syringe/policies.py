from enum import Enum


class AutowireType(str, Enum):
    """Strategy used to find a registered instance for an attribute."""

    BY_NAME = "by_name"
    """Look up the attribute name first, then fall back to the declared type name."""

    BY_TYPE = "by_type"
    """Look up the declared type name only. The attribute name is never consulted."""


class FinishPolicy(str, Enum):
    """Policy for handling wiring failures during ``finish_registration``."""

    ABORT = "abort"
    """Propagate the first failure and leave the remaining entries unprocessed."""

    COLLECT = "collect"
    """Wire every entry, then raise all failures together."""
