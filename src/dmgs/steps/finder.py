"""Finder window layout for the mounted volume."""

from dmgs.context import BuildContext, PipelineState
from dmgs.script import render_customization_script
from dmgs.steps.base import BuildStep, emit
from dmgs.utils.process import OutputCallback


class CustomizeStep(BuildStep):
    """Set background, window bounds and icon positions through Finder."""

    reaches = PipelineState.CUSTOMIZED

    def __init__(self) -> None:
        super().__init__("Customizing Finder window...")

    async def execute(self, ctx: BuildContext, on_output: OutputCallback | None) -> None:
        config = ctx.config
        script = render_customization_script(
            volume_name=config.app_name,
            app_file_name=config.app_file_name,
            background_file_name=config.background_file_name,
            icon_size=config.icon_size,
            window_bounds=config.window_bounds,
            app_position=config.app_position,
            applications_position=config.applications_position,
        )
        await ctx.runner.run_script(script, on_output)

        # Finder applies the update asynchronously and has nothing to poll
        delay = ctx.options.finder_settle_delay
        if delay > 0:
            await emit(on_output, f"Waiting {delay:g}s for Finder...\n")
            await ctx.sleep(delay)
