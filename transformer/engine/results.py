"""Per-call result cache consulted by operation links."""

import logging
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class CallResultCache:
    """
    Last result produced by each call, keyed by call id.

    The engine drops a call's entry when the call starts running and records
    the result once it succeeds. A call that has not run (or whose last run
    failed) has no entry.
    """

    def __init__(self):
        self._results: Dict[str, Any] = {}

    def record(self, call_id: str, result: Any) -> None:
        self._results[call_id] = result
        logger.debug(f"Recorded result for call {call_id}")

    def has(self, call_id: str) -> bool:
        return call_id in self._results

    def get(self, call_id: str) -> Any:
        """Return the recorded result. Raises KeyError if the call never ran."""
        return self._results[call_id]

    def discard(self, call_id: str) -> None:
        self._results.pop(call_id, None)

    def clear(self) -> None:
        self._results.clear()

    def call_ids(self) -> List[str]:
        return list(self._results.keys())

    def __contains__(self, call_id: str) -> bool:
        return self.has(call_id)

    def __len__(self) -> int:
        return len(self._results)
