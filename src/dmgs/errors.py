"""Errors raised while building a DMG."""


class DMGBuilderError(Exception):
    """Base class for all build errors."""


class AppNotFound(DMGBuilderError):
    """The .app bundle does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"App file not found at path: {path}")


class BackgroundNotFound(DMGBuilderError):
    """The background image is missing or its size cannot be read."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Background image not found at path: {path}")


class VolumeNotMounted(DMGBuilderError):
    """The attached image never showed up at its mount point."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Volume not mounted at path: {path}")


class CommandFailed(DMGBuilderError):
    """An external command exited with a non-zero status."""

    def __init__(self, command: str, output: str) -> None:
        """Initialize the error.

        Args:
            command: Command line that was run
            output: Combined stdout and stderr of the command
        """
        self.command = command
        self.output = output
        super().__init__(f"Command failed: {command}\n{output}")


class ScriptFailed(DMGBuilderError):
    """The Finder customization script failed."""

    def __init__(self, output: str) -> None:
        self.output = output
        super().__init__(f"AppleScript failed: {output}")
