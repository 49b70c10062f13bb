"""Base class for build steps."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dmgs.config import DMGConfiguration
    from dmgs.context import BuildContext, PipelineState
    from dmgs.utils.process import OutputCallback


class StepStatus(Enum):
    """Status of a build step."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    WARNING = "warning"
    FAILED = "failed"
    SKIPPED = "skipped"


class StepSeverity(Enum):
    """What a failure of the step means for the build."""

    FATAL = "fatal"
    ADVISORY = "advisory"


class BuildStep(ABC):
    """Abstract base class for build steps.

    Each step performs one stage of the DMG build (e.g. creating the
    working image, mounting it, converting it). Fatal steps abort the
    build when they fail; advisory steps only produce a warning.
    """

    severity: StepSeverity = StepSeverity.FATAL
    reaches: "PipelineState | None" = None

    def __init__(self, name: str) -> None:
        """Initialize the build step.

        Args:
            name: Human-readable name for the step
        """
        self.name = name
        self.status = StepStatus.PENDING

    @abstractmethod
    async def execute(
        self,
        ctx: "BuildContext",
        on_output: "OutputCallback | None",
    ) -> None:
        """Execute the build step.

        Args:
            ctx: Build context with configuration and capabilities
            on_output: Async callback for command output

        Raises:
            DMGBuilderError: If the step fails
        """
        ...

    def should_run(self, config: "DMGConfiguration") -> bool:
        """Determine if this step should run for the given config.

        Override in subclasses to conditionally skip steps.
        """
        return True


async def emit(on_output: "OutputCallback | None", text: str) -> None:
    """Send a progress line to the output callback, if there is one."""
    if on_output:
        await on_output(text)
