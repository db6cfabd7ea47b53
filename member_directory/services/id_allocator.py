# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: member identifier allocation.

A caller-supplied id is kept when it is free. Otherwise random decimal ids
are drawn from [0, upper_bound) until one is free. Each draw is independent,
so in a sparse keyspace this ends after one or two lookups.
"""

import random
from typing import Optional

from member_directory.core.logging import get_logger
from member_directory.metrics import ID_COLLISIONS
from member_directory.repositories.base import MemberStore

logger = get_logger(__name__)

DEFAULT_UPPER_BOUND = 99_999_999
SUBSTITUTION_NOTE = (
    "The provided ID was not unique, so a unique one with number {clid} was created. "
)


class IdentifierExhaustedError(RuntimeError):
    """No free identifier was found within max_attempts draws."""


class IdentifierAllocator:
    def __init__(
        self,
        repo: MemberStore,
        upper_bound: int = DEFAULT_UPPER_BOUND,
        rng: Optional[random.Random] = None,
        max_attempts: Optional[int] = None,
    ) -> None:
        self._repo = repo
        self._upper_bound = upper_bound
        self._rng = rng or random.SystemRandom()
        self._max_attempts = max_attempts

    def draw(self) -> str:
        return str(self._rng.randrange(0, self._upper_bound))

    def allocate(self, requested: str = "") -> tuple[str, str]:
        """Return (clid, note). note is empty unless the requested id was replaced.

        Read-only: the id is free at the moment of the check, nothing is reserved.
        """
        candidate = requested or self.draw()
        attempts = 0
        while self._repo.exists(candidate):
            ID_COLLISIONS.inc()
            attempts += 1
            if self._max_attempts is not None and attempts >= self._max_attempts:
                raise IdentifierExhaustedError(
                    f"No free member ID found after {attempts} attempts"
                )
            candidate = self.draw()

        if requested and candidate != requested:
            logger.info("Requested id %s taken, substituted %s", requested, candidate)
            return candidate, SUBSTITUTION_NOTE.format(clid=candidate)
        return candidate, ""
