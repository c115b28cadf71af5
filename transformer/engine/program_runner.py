"""
Program runner - holds a program's calls and runs them on request.

Calls are kept in an append-only map keyed by call id. A single call can be
run by id, or every call can be run in program order ("run all"). Call-time
failures are caught here, logged, and reported as outcomes; registration and
programming errors are not this module's concern.

Usage:
    runner = ProgramRunner(registry, capabilities)
    runner.load(create_hello_world_program("demo"))
    report = await runner.run_all()
    if not report.succeeded:
        print(report.failures[0].message)
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..config.settings import is_enabled
from ..core.capabilities import Capabilities
from ..models.program import OperationCall, Program
from ..registry.operation_registry import OperationRegistry, OperationRegistryError
from .executor import run_operation
from .results import CallResultCache

logger = logging.getLogger(__name__)


# ============================================================================
# Exceptions
# ============================================================================

class ProgramError(OperationRegistryError):
    """Base exception for program assembly errors."""
    pass


class DuplicateCallError(ProgramError):
    """Call id already present in the runner."""
    pass


class UnknownCallError(ProgramError):
    """No call with the requested id."""
    pass


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class CallOutcome:
    """Result of running one call."""
    call_id: str
    op_def_id: str
    success: bool
    message: str
    result: Any = None
    error_type: Optional[str] = None
    duration_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "call_id": self.call_id,
            "op_def_id": self.op_def_id,
            "success": self.success,
            "message": self.message,
            "duration_ms": round(self.duration_ms, 3),
        }
        if self.result is not None:
            data["result"] = self.result
        if self.error_type:
            data["error_type"] = self.error_type
        return data


@dataclass
class ProgramRunReport:
    """Outcomes of a run-all sweep, in execution order."""
    outcomes: List[CallOutcome] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.skipped and all(o.success for o in self.outcomes)

    @property
    def failures(self) -> List[CallOutcome]:
        return [o for o in self.outcomes if not o.success]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "succeeded": self.succeeded,
            "outcomes": [o.to_dict() for o in self.outcomes],
            "skipped": list(self.skipped),
        }


# ============================================================================
# Program Runner
# ============================================================================

class ProgramRunner:
    """Runs the calls of one or more programs against a registry."""

    def __init__(
        self,
        registry: OperationRegistry,
        capabilities: Capabilities,
        stop_on_error: Optional[bool] = None
    ):
        """
        Args:
            registry: Registry used to look up operation definitions
            capabilities: Host services passed to every implementation
            stop_on_error: Stop run_all at the first failed call
                (default: the ``stop_on_error`` feature flag)
        """
        self.registry = registry
        self.capabilities = capabilities
        self.stop_on_error = is_enabled('stop_on_error') if stop_on_error is None else stop_on_error
        self.results = CallResultCache()
        self._calls: Dict[str, OperationCall] = {}

    # ========================================================================
    # Assembly
    # ========================================================================

    def add_call(self, call: OperationCall) -> None:
        """
        Add a call.

        Raises:
            DuplicateCallError: If a call with the same id was already added
        """
        if call.call_id in self._calls:
            raise DuplicateCallError(f"Call {call.call_id} already added")
        self._calls[call.call_id] = call

    def load(self, program: Program) -> None:
        """
        Add every call of a program, in program order.

        Raises:
            DuplicateCallError: If any call id was already added; nothing is added
        """
        for call in program.calls:
            if call.call_id in self._calls:
                raise DuplicateCallError(f"Call {call.call_id} already added")

        for call in program.calls:
            self._calls[call.call_id] = call
        logger.info(f"Loaded program '{program.name}' ({len(program.calls)} calls)")

    def get_call(self, call_id: str) -> Optional[OperationCall]:
        return self._calls.get(call_id)

    @property
    def calls(self) -> List[OperationCall]:
        return list(self._calls.values())

    def reset(self) -> None:
        """Forget all calls and recorded results."""
        self._calls.clear()
        self.results.clear()

    # ========================================================================
    # Execution
    # ========================================================================

    async def run_call(self, call_id: str) -> CallOutcome:
        """
        Run one call by id.

        Raises:
            UnknownCallError: If no call has this id
        """
        call = self._calls.get(call_id)
        if call is None:
            raise UnknownCallError(f"Unknown call: {call_id}")
        return await self._run(call)

    async def run_all(self) -> ProgramRunReport:
        """Run every call in order."""
        report = ProgramRunReport()
        calls = self.calls

        for index, call in enumerate(calls):
            outcome = await self._run(call)
            report.outcomes.append(outcome)

            if not outcome.success and self.stop_on_error:
                report.skipped = [c.call_id for c in calls[index + 1:]]
                if report.skipped:
                    logger.warning(
                        f"Stopped after {call.call_id}; skipped {len(report.skipped)} call(s)"
                    )
                break

        logger.info(
            f"Program run finished: {len(report.outcomes) - len(report.failures)} succeeded, "
            f"{len(report.failures)} failed, {len(report.skipped)} skipped"
        )
        return report

    async def _run(self, call: OperationCall) -> CallOutcome:
        started = time.perf_counter()
        try:
            result = await run_operation(self.capabilities, self.registry, call, self.results)

        except Exception as e:
            duration = (time.perf_counter() - started) * 1000
            logger.error(f"Call {call.call_id} ({call.op_def_id}) failed: {e}")
            return CallOutcome(
                call_id=call.call_id,
                op_def_id=call.op_def_id,
                success=False,
                message=str(e),
                error_type=e.__class__.__name__,
                duration_ms=duration,
            )

        duration = (time.perf_counter() - started) * 1000
        return CallOutcome(
            call_id=call.call_id,
            op_def_id=call.op_def_id,
            success=True,
            message=f"{call.op_def_id} completed",
            result=result,
            duration_ms=duration,
        )
