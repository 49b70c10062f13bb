"""State shared by the build steps during one build."""

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum

from dmgs.config import BuildOptions, DMGConfiguration
from dmgs.utils.fs import FileSystem
from dmgs.utils.polling import Clock, Sleep
from dmgs.utils.process import ProcessRunner


class PipelineState(Enum):
    """How far a build has progressed."""

    IDLE = "idle"
    VALIDATED = "validated"
    TEMP_CREATED = "temp-created"
    MOUNTED = "mounted"
    POPULATED = "populated"
    CUSTOMIZED = "customized"
    UNMOUNTED = "unmounted"
    CONVERTED = "converted"
    ICON_SET = "icon-set"
    SIGNED = "signed"
    CLEANED_UP = "cleaned-up"
    DONE = "done"


@dataclass
class Compensation:
    """Undo action for a side effect a step has already made."""

    key: str
    description: str
    action: Callable[[], Awaitable[None]]


@dataclass
class BuildContext:
    """Configuration, capabilities and progress of the running build."""

    config: DMGConfiguration
    runner: ProcessRunner
    fs: FileSystem
    options: BuildOptions = field(default_factory=BuildOptions)
    sleep: Sleep = asyncio.sleep
    clock: Clock = time.monotonic
    state: PipelineState = PipelineState.IDLE
    compensations: list[Compensation] = field(default_factory=list)

    def register(
        self,
        key: str,
        description: str,
        action: Callable[[], Awaitable[None]],
    ) -> None:
        """Push an undo action, run in reverse order if a later step fails."""
        self.compensations.append(Compensation(key, description, action))

    def release(self, key: str) -> None:
        """Drop undo actions for a side effect that no longer needs undoing."""
        self.compensations = [c for c in self.compensations if c.key != key]

    def commit(self) -> None:
        """The build succeeded; keep everything."""
        self.compensations.clear()
