"""Code signing step."""

from dmgs.config import DMGConfiguration
from dmgs.context import BuildContext, PipelineState
from dmgs.signing import sign_dmg
from dmgs.steps.base import BuildStep, emit
from dmgs.utils.process import OutputCallback


class SignStep(BuildStep):
    """Sign the final DMG and verify the signature."""

    reaches = PipelineState.SIGNED

    def __init__(self) -> None:
        super().__init__("Signing DMG...")

    async def execute(self, ctx: BuildContext, on_output: OutputCallback | None) -> None:
        identity = ctx.config.signing_identity
        if not identity:
            return

        await emit(on_output, f"Signing with: {identity}\n")
        authority = await sign_dmg(ctx.runner, ctx.config.output_path, identity, on_output)
        await emit(on_output, f"\033[32m✓ Signed by {authority}\033[0m\n")

    def should_run(self, config: DMGConfiguration) -> bool:
        """Run only when a signing identity was given."""
        return bool(config.signing_identity)
