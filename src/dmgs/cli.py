"""Command-line interface for the DMG builder."""

import argparse
import sys

COMMANDS = ("create", "identities")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dmgs",
        description="Create a DMG installer for macOS applications",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Creates a DMG installer with a custom background image, icon positions
derived from the background size, and an Applications folder symlink.
The app name is taken from the .app bundle.

Examples:
  dmgs MyApp.app background.png                 Create MyApp.dmg in the current directory
  dmgs create MyApp.app bg.png -o dist --sign "Developer ID Application: Me (TEAMID)"
  dmgs identities                               List code signing identities
        """,
    )
    subparsers = parser.add_subparsers(dest="command")

    create = subparsers.add_parser("create", help="Create a DMG installer (default command)")
    create.add_argument("app_path", help="Path to the .app bundle")
    create.add_argument("background_path", help="Path to the background image for the DMG")
    create.add_argument(
        "-o",
        "--output",
        help="Output directory for the DMG (defaults to current directory)",
    )
    create.add_argument(
        "--icon-size",
        type=int,
        default=None,
        help="Icon size in the DMG window (default: 100)",
    )
    create.add_argument(
        "--volume-size",
        default=None,
        help="Size of the temporary volume, as accepted by hdiutil (default: 200m)",
    )
    create.add_argument(
        "--sign",
        default=None,
        help='Code signing identity to sign the DMG (e.g., "Developer ID Application")',
    )
    create.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose output",
    )
    create.add_argument(
        "--simple",
        action="store_true",
        help="Use simple output instead of TUI (colors preserved)",
    )

    subparsers.add_parser("identities", help="List available code signing identities")
    return parser


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    ``create`` is the default subcommand, so ``dmgs App.app bg.png`` works.

    Args:
        args: Arguments to parse, or None to use sys.argv

    Returns:
        Parsed arguments namespace
    """
    argv = list(sys.argv[1:] if args is None else args)
    if argv and argv[0] not in COMMANDS and argv[0] not in ("-h", "--help"):
        argv.insert(0, "create")
    namespace = build_parser().parse_args(argv)
    if namespace.command is None:
        build_parser().error("missing command")
    return namespace


def should_use_tui(args: argparse.Namespace) -> bool:
    """Determine whether to use Textual TUI.

    Returns False if:
    - User requested simple output (--simple)
    - Not running in a TTY (CI, piped output)
    """
    if args.simple:
        return False
    if not sys.stdout.isatty():
        return False
    return True
