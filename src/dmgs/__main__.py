"""Entry point for the DMG builder.

Usage:
    dmgs App.app background.png            Create App.dmg in the current directory
    dmgs create App.app bg.png --sign ID   Create and sign
    dmgs identities                        List code signing identities
    python -m dmgs ...                     Same as above
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

from dmgs.cli import parse_args, should_use_tui
from dmgs.config import DMGConfiguration, ProjectSettings
from dmgs.errors import DMGBuilderError
from dmgs.pipeline import get_steps
from dmgs.runner import describe, run_build
from dmgs.signing import has_identities, list_identities
from dmgs.utils.logging import BuildLogger
from dmgs.utils.process import ProcessRunner

RED = "\033[31m"
NC = "\033[0m"


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = parse_args()
    if args.command == "identities":
        return show_identities()
    return create(args)


def show_identities() -> int:
    """Print the code signing identities found in the keychain."""
    try:
        output = asyncio.run(list_identities(ProcessRunner()))
    except DMGBuilderError as e:
        print(f"{RED}{e}{NC}", file=sys.stderr)
        return 1

    if not has_identities(output):
        print("No code signing identities found in keychain.")
        print()
        print("To sign DMGs, you need a valid code signing certificate.")
        print("Visit https://developer.apple.com/account for more information.")
    else:
        print("Available code signing identities:")
        print()
        print(output)
    return 0


def create(args: argparse.Namespace) -> int:
    """Resolve configuration and run the build."""
    project_dir = Path.cwd()
    settings = ProjectSettings.load(project_dir)

    output_dir = args.output or settings.output_dir
    output_dir = str((project_dir / output_dir).resolve()) if output_dir else str(project_dir)

    try:
        config = DMGConfiguration.create(
            os.path.abspath(args.app_path),
            os.path.abspath(args.background_path),
            output_directory=output_dir,
            volume_size=args.volume_size or settings.volume_size,
            icon_size=args.icon_size if args.icon_size is not None else settings.icon_size,
            signing_identity=args.sign or settings.signing_identity,
        )
    except DMGBuilderError as e:
        print(f"{RED}Error: {e}{NC}", file=sys.stderr)
        return 1

    if args.verbose:
        print_configuration(config)

    # Initialize build logger (rotates previous logs)
    logger = BuildLogger(settings.resolve_log_dir(config.output_directory), settings.max_log_files)

    if should_use_tui(args):
        return run_with_tui(config, settings, logger)
    return run_with_simple_ui(config, settings, logger)


def print_configuration(config: DMGConfiguration) -> None:
    print("Configuration:")
    print(f"  App Name: {config.app_name}")
    print(f"  App Path: {config.app_path}")
    print(f"  Background: {config.background_path}")
    print(f"  Output: {config.output_path}")
    print(f"  Volume Size: {config.volume_size}")
    print(f"  Icon Size: {config.icon_size}")
    print(f"  Window Bounds: {tuple(config.window_bounds)}")
    print(f"  App Position: {tuple(config.app_position)}")
    print(f"  Applications Position: {tuple(config.applications_position)}")
    if config.signing_identity:
        print(f"  Signing Identity: {config.signing_identity}")
    print()


def run_with_tui(config: DMGConfiguration, settings: ProjectSettings, logger: BuildLogger) -> int:
    """Run build with Textual TUI.

    Returns:
        Exit code
    """
    from dmgs.ui import get_tui_class

    build_app_class = get_tui_class()
    step_names = [step.name for step in get_steps(config)]

    # Store result for after app exits
    result = {"success": False}
    app = None

    logger.start()
    logger.write_line(f"=== Creating DMG for {describe(config)} ===\n")

    def start_build() -> None:
        """Start the build process when UI is ready."""
        asyncio.create_task(do_build())

    async def do_build() -> None:
        """Run build and exit when done."""
        if app is None:
            return
        try:
            result["success"] = await run_build(config, app, settings.options)
        except Exception as e:
            app.log_error(f"Build failed: {e}")
            result["success"] = False
        finally:
            app.exit()

    app = build_app_class(
        build_description=describe(config),
        step_names=step_names,
        on_ready=start_build,
        logger=logger,
    )
    app.run()

    logger.close()
    return 0 if result["success"] else 1


def run_with_simple_ui(
    config: DMGConfiguration,
    settings: ProjectSettings,
    logger: BuildLogger,
) -> int:
    """Run build with simple colored output.

    Returns:
        Exit code
    """
    from dmgs.ui.simple import SimpleUI

    with logger:
        ui = SimpleUI(logger=logger)
        header = f"\033[32m=== Creating DMG for {describe(config)} ===\033[0m"
        print(header)
        logger.write_line(header)
        success = asyncio.run(run_build(config, ui, settings.options))

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
