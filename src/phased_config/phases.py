from __future__ import annotations

import enum
import logging
from typing import Optional

from .exceptions import PhaseError, PhaseOrderError

logger = logging.getLogger("phased_config.phases")
logger.addHandler(logging.NullHandler())


class Phase(enum.IntEnum):
    REGISTER = 0
    CONFIG = 1
    USE = 2

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


class PhaseGuard:
    """Monotonic register -> config -> use lifecycle.

    Not synchronized on its own; the owning registry serializes access.
    """

    def __init__(self) -> None:
        self._phase = Phase.REGISTER

    @property
    def current(self) -> Phase:
        return self._phase

    def advance(self, target: Phase) -> Phase:
        """Commit ``target`` and return the phase that was left."""
        target = Phase(target)
        if target <= self._phase:
            logger.error("Rejected phase transition %s -> %s", self._phase, target)
            raise PhaseOrderError(target, self._phase)
        previous, self._phase = self._phase, target
        return previous

    def ensure(self, required: Phase, name: Optional[str] = None) -> None:
        if self._phase != required:
            logger.error(
                "Phase check failed: required=%s current=%s property=%r",
                required,
                self._phase,
                name,
            )
            raise PhaseError(required, self._phase, name)

    def is_at(self, phase: Phase) -> bool:
        return self._phase == phase

    def reset(self) -> None:
        self._phase = Phase.REGISTER
