"""Pre-flight checks and removal of leftovers from earlier builds."""

from dmgs.config import DMGConfiguration
from dmgs.context import BuildContext, PipelineState
from dmgs.errors import AppNotFound, BackgroundNotFound
from dmgs.signing import validate_identity
from dmgs.steps.base import BuildStep, StepSeverity, emit
from dmgs.utils.fs import FileSystem
from dmgs.utils.process import OutputCallback


def check_sources(config: DMGConfiguration, fs: FileSystem) -> None:
    """Make sure the app bundle and background image are still there.

    Raises:
        AppNotFound: If the app bundle is missing
        BackgroundNotFound: If the background image is missing
    """
    if not fs.exists(config.app_path):
        raise AppNotFound(config.app_path)
    if not fs.exists(config.background_path):
        raise BackgroundNotFound(config.background_path)


class ValidateStep(BuildStep):
    """Check inputs before anything is created on disk."""

    reaches = PipelineState.VALIDATED

    def __init__(self) -> None:
        super().__init__("Validating configuration...")

    async def execute(self, ctx: BuildContext, on_output: OutputCallback | None) -> None:
        check_sources(ctx.config, ctx.fs)

        identity = ctx.config.signing_identity
        if identity:
            await emit(on_output, f"Checking signing identity: {identity}\n")
            await validate_identity(ctx.runner, identity)


class RemoveStaleOutputStep(BuildStep):
    """Delete DMGs left behind by a previous build."""

    severity = StepSeverity.ADVISORY

    def __init__(self) -> None:
        super().__init__("Removing previous output...")

    async def execute(self, ctx: BuildContext, on_output: OutputCallback | None) -> None:
        for path in (ctx.config.output_path, ctx.config.temp_dmg_path):
            if ctx.fs.exists(path):
                ctx.fs.remove(path)
                await emit(on_output, f"Removed existing DMG: {path}\n")
