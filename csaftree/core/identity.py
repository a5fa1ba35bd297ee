"""
Identifier generation.

Every product tree branch, family and relationship gets a short random id at
creation which stays stable for its lifetime. Wire-format ids handed out to
relationship edges are sequential (``CSAFRID-0001``, ...).
"""

import uuid
from typing import Dict, Iterable, Optional, Set


def generate_id() -> str:
    """Return a new random identifier."""
    return uuid.uuid4().hex[:11]


class PidGenerator:
    """Sequential wire-format id generator.

    The same key always maps to the same id. Ids listed in ``reserved`` are
    never handed out, so ids generated during an editing session do not
    collide with ids that came in through an import.

    Example:
        rid = PidGenerator(prefix="CSAFRID")
        rid.get_pid("a")   # "CSAFRID-0001"
        rid.get_pid("b")   # "CSAFRID-0002"
        rid.get_pid("a")   # "CSAFRID-0001"
    """

    def __init__(
        self,
        prefix: str = "CSAFPID",
        padding: int = 4,
        reserved: Optional[Iterable[str]] = None
    ):
        self.prefix = prefix
        self.padding = padding
        self._counter = 1
        self._generated: Dict[str, str] = {}
        self._reserved: Set[str] = set(reserved or [])

    def reserve(self, pids: Iterable[str]) -> None:
        """Mark ids as taken."""
        self._reserved.update(pids)

    def get_pid(self, key: Optional[str] = None) -> str:
        """Return the id for ``key``, generating one if needed.

        Args:
            key: Lookup key. ``None`` always produces a fresh id.

        Returns:
            Wire-format id such as ``CSAFRID-0003``
        """
        if key is not None and key in self._generated:
            return self._generated[key]

        pid = self._next_pid()
        while pid in self._reserved:
            pid = self._next_pid()
        self._reserved.add(pid)

        if key is not None:
            self._generated[key] = pid
        return pid

    def _next_pid(self) -> str:
        pid = f"{self.prefix}-{str(self._counter).zfill(self.padding)}"
        self._counter += 1
        return pid

    def __call__(self) -> str:
        return self.get_pid()

    def __repr__(self) -> str:
        return f"PidGenerator(prefix='{self.prefix}', next={self._counter})"
