"""DMG file icon step."""

from dmgs.context import BuildContext, PipelineState
from dmgs.icon import set_dmg_icon
from dmgs.steps.base import BuildStep, StepSeverity, emit
from dmgs.utils.process import OutputCallback


class SetIconStep(BuildStep):
    """Composite the app icon onto a drive icon and assign it to the DMG."""

    severity = StepSeverity.ADVISORY
    reaches = PipelineState.ICON_SET

    def __init__(self) -> None:
        super().__init__("Setting DMG icon...")

    async def execute(self, ctx: BuildContext, on_output: OutputCallback | None) -> None:
        assigned = await set_dmg_icon(
            ctx.config.output_path,
            ctx.config.app_path,
            ctx.runner,
            on_output,
        )
        if assigned:
            await emit(on_output, "\033[32m✓ Custom icon set\033[0m\n")
        else:
            await emit(on_output, "No app icon found, keeping the default DMG icon\n")
