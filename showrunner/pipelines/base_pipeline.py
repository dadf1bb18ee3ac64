"""
Showrunner Step Pipeline

Runs a fixed sequence of async steps, threading each step's output into the
next and sharing one context dict between them. A step that raises ends the
run with a FAILED result naming the step; the exception never reaches the
caller.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from showrunner.core.exceptions import PipelineStageError
from showrunner.core.logging_config import get_logger

logger = get_logger("pipelines.base")

InputT = TypeVar('InputT')
OutputT = TypeVar('OutputT')


class PipelineStatus(Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class PipelineResult(Generic[OutputT]):
    """Outcome of one run; metadata carries whatever steps left in context['metadata']."""
    status: PipelineStatus
    output: Optional[OutputT] = None
    error: Optional[str] = None
    duration_seconds: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return self.status == PipelineStatus.COMPLETED


@dataclass
class PipelineStep:
    name: str
    description: str


class BasePipeline(ABC, Generic[InputT, OutputT]):
    """
    Base class for step pipelines.

    Subclasses list their steps in _define_steps and dispatch on step name in
    _execute_step.
    """

    def __init__(self, name: str):
        self.name = name
        self._steps: List[PipelineStep] = []
        self._status = PipelineStatus.PENDING
        self._define_steps()

    @abstractmethod
    def _define_steps(self) -> None:
        ...

    @abstractmethod
    async def _execute_step(
        self,
        step: PipelineStep,
        input_data: Any,
        context: Dict[str, Any]
    ) -> Any:
        ...

    async def run(
        self,
        input_data: InputT,
        context: Optional[Dict[str, Any]] = None
    ) -> PipelineResult[OutputT]:
        """
        Run every step in order.

        Args:
            input_data: Input for the first step
            context: Shared state visible to every step

        Returns:
            COMPLETED result with the last step's output, or a FAILED result
            whose metadata names the failing step
        """
        context = context if context is not None else {}
        started = datetime.now()
        self._status = PipelineStatus.RUNNING
        logger.info(f"Starting pipeline '{self.name}' ({len(self._steps)} steps)")

        data: Any = input_data
        for step in self._steps:
            logger.debug(f"[{self.name}] {step.name}: {step.description}")
            try:
                data = await self._execute_step(step, data, context)
            except Exception as e:
                error = PipelineStageError(step.name, str(e))
                self._status = PipelineStatus.FAILED
                logger.error(f"Pipeline '{self.name}' failed: {error}")
                return PipelineResult(
                    status=PipelineStatus.FAILED,
                    error=str(error),
                    duration_seconds=self._elapsed(started),
                    metadata={"failed_step": step.name, **error.details},
                )

        self._status = PipelineStatus.COMPLETED
        logger.info(f"Pipeline '{self.name}' completed")
        return PipelineResult(
            status=PipelineStatus.COMPLETED,
            output=data,
            duration_seconds=self._elapsed(started),
            metadata={"steps_completed": len(self._steps), **context.get("metadata", {})},
        )

    @staticmethod
    def _elapsed(started: datetime) -> float:
        return (datetime.now() - started).total_seconds()

    @property
    def status(self) -> PipelineStatus:
        return self._status

    @property
    def steps(self) -> List[PipelineStep]:
        return list(self._steps)
