"""DMG build orchestration.

Steps run strictly in order. Each step that creates something on disk
registers an undo action. By default a failed build is left as it is and
the undo actions are only listed; with rollback enabled they run
newest-first. Either way the original error is re-raised. Advisory steps
never stop the build.
"""

import asyncio
import time

from dmgs.config import BuildOptions, DMGConfiguration
from dmgs.context import BuildContext, PipelineState
from dmgs.steps import (
    BuildStep,
    CleanupStep,
    ConvertStep,
    CreateImageStep,
    CustomizeStep,
    MountStep,
    PopulateStep,
    RemoveStaleOutputStep,
    SetIconStep,
    SignStep,
    StepSeverity,
    StepStatus,
    UnmountStep,
    ValidateStep,
)
from dmgs.steps.validate import check_sources
from dmgs.ui.protocol import BuildUI
from dmgs.utils.fs import FileSystem, LocalFileSystem
from dmgs.utils.polling import Clock, Sleep
from dmgs.utils.process import ProcessRunner


def get_steps(config: DMGConfiguration) -> list[BuildStep]:
    """Get list of build steps for the given configuration.

    Args:
        config: Build configuration

    Returns:
        List of steps to execute
    """
    all_steps: list[BuildStep] = [
        ValidateStep(),
        RemoveStaleOutputStep(),
        CreateImageStep(),
        MountStep(),
        PopulateStep(),
        CustomizeStep(),
        UnmountStep(),
        ConvertStep(),
        SetIconStep(),
        SignStep(),  # Only with a signing identity
        CleanupStep(),
    ]
    return [step for step in all_steps if step.should_run(config)]


class DMGBuilder:
    """Runs the DMG build pipeline against injectable OS capabilities."""

    def __init__(
        self,
        runner: ProcessRunner | None = None,
        fs: FileSystem | None = None,
        options: BuildOptions | None = None,
        sleep: Sleep = asyncio.sleep,
        clock: Clock = time.monotonic,
    ) -> None:
        """Initialize the builder.

        Args:
            runner: Runs external commands (real processes by default)
            fs: Filesystem access (the local disk by default)
            options: Timing and rollback options
            sleep: Async sleep used for polling and settle delays
            clock: Monotonic clock used for polling timeouts
        """
        self.runner = runner or ProcessRunner()
        self.fs = fs or LocalFileSystem()
        self.options = options or BuildOptions()
        self.sleep = sleep
        self.clock = clock
        self.state = PipelineState.IDLE
        self.results: list[tuple[str, StepStatus]] = []

    def validate(self, config: DMGConfiguration) -> None:
        """Check that the app bundle and background image exist.

        Raises:
            AppNotFound: If the app bundle is missing
            BackgroundNotFound: If the background image is missing
        """
        check_sources(config, self.fs)

    async def build(self, config: DMGConfiguration, ui: BuildUI | None = None) -> None:
        """Build the DMG described by ``config``.

        Args:
            config: Build configuration
            ui: Optional UI receiving step progress and command output

        Raises:
            DMGBuilderError: The error of the first fatal step that failed
        """
        ctx = BuildContext(
            config=config,
            runner=self.runner,
            fs=self.fs,
            options=self.options,
            sleep=self.sleep,
            clock=self.clock,
        )
        steps = get_steps(config)
        self.state = ctx.state
        self.results = [(step.name, StepStatus.PENDING) for step in steps]
        on_output = ui.log_output if ui else None

        for i, step in enumerate(steps, 1):
            await self._set_status(ui, i, step, StepStatus.RUNNING, len(steps))
            try:
                await step.execute(ctx, on_output)
            except Exception as e:
                if step.severity is StepSeverity.ADVISORY:
                    if ui:
                        ui.log_warning(f"{step.name} {e}")
                    await self._set_status(ui, i, step, StepStatus.WARNING)
                else:
                    await self._set_status(ui, i, step, StepStatus.FAILED)
                    if ui:
                        ui.log_error(str(e))
                    await self._roll_back(ctx, ui)
                    raise
            else:
                await self._set_status(ui, i, step, StepStatus.SUCCESS)

            if step.reaches is not None:
                ctx.state = step.reaches
                self.state = ctx.state

        ctx.commit()
        ctx.state = PipelineState.DONE
        self.state = ctx.state

    async def _set_status(
        self,
        ui: BuildUI | None,
        step_num: int,
        step: BuildStep,
        status: StepStatus,
        total: int | None = None,
    ) -> None:
        step.status = status
        self.results[step_num - 1] = (step.name, status)
        if ui is None:
            return
        if total is not None:
            await ui.log_step(step_num, total, step.name)
        await ui.update_step_status(step_num, status)

    async def _roll_back(self, ctx: BuildContext, ui: BuildUI | None) -> None:
        """Undo registered side effects, newest first, ignoring their failures."""
        if not ctx.compensations:
            return
        if not self.options.rollback:
            if ui:
                for compensation in ctx.compensations:
                    ui.log_info(f"Rollback disabled, not done: {compensation.description}")
            return

        while ctx.compensations:
            compensation = ctx.compensations.pop()
            try:
                await compensation.action()
            except Exception as e:
                if ui:
                    ui.log_warning(f"Rollback failed: {compensation.description}: {e}")
            else:
                if ui:
                    ui.log_info(f"Rolled back: {compensation.description}")
