"""Conversion to the final compressed DMG and removal of the working image."""

from dmgs.context import BuildContext, PipelineState
from dmgs.steps.base import BuildStep, emit
from dmgs.utils.process import OutputCallback

# Format: UDZO is zlib-compressed, read-only
OUTPUT_FORMAT = "UDZO"


class ConvertStep(BuildStep):
    """Convert the working image into the distributable DMG."""

    reaches = PipelineState.CONVERTED

    def __init__(self) -> None:
        super().__init__("Converting to compressed DMG...")

    async def execute(self, ctx: BuildContext, on_output: OutputCallback | None) -> None:
        config = ctx.config
        await ctx.runner.run(
            "hdiutil",
            ["convert", config.temp_dmg_path, "-format", OUTPUT_FORMAT, "-o", config.output_path],
            on_output,
        )

        async def remove_output() -> None:
            ctx.fs.remove(config.output_path)

        ctx.register("output", f"Remove {config.output_path}", remove_output)
        await emit(on_output, f"\033[32m✓ DMG created: {config.output_path}\033[0m\n")


class CleanupStep(BuildStep):
    """Remove the working image once the final DMG exists."""

    reaches = PipelineState.CLEANED_UP

    def __init__(self) -> None:
        super().__init__("Cleaning up...")

    async def execute(self, ctx: BuildContext, on_output: OutputCallback | None) -> None:
        ctx.fs.remove(ctx.config.temp_dmg_path)
        await emit(on_output, f"Removed {ctx.config.temp_dmg_path}\n")
        ctx.commit()
