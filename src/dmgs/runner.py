"""Runs a build against a UI and reports the outcome."""

from dmgs.config import BuildOptions, DMGConfiguration
from dmgs.errors import DMGBuilderError
from dmgs.pipeline import DMGBuilder
from dmgs.ui.protocol import BuildUI


def describe(config: DMGConfiguration) -> str:
    """Human-readable build description."""
    if config.signing_identity:
        return f"{config.app_name} (signed)"
    return f"{config.app_name} (unsigned)"


async def run_build(
    config: DMGConfiguration,
    ui: BuildUI,
    options: BuildOptions | None = None,
    builder: DMGBuilder | None = None,
) -> bool:
    """Run the complete build process.

    Args:
        config: Build configuration
        ui: UI for output and status updates
        options: Timing and rollback options
        builder: Builder to use (a default one if None)

    Returns:
        True if build succeeded, False otherwise
    """
    builder = builder or DMGBuilder(options=options)
    success = True

    try:
        await builder.build(config, ui)
    except (DMGBuilderError, OSError):
        # Already reported by the builder
        success = False

    ui.print_summary(
        steps=builder.results,
        success=success,
        output_path=config.output_path if success else None,
        build_description=describe(config),
    )
    return success
