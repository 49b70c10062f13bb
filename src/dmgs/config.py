"""Configuration management for the DMG builder.

Loads configuration from:
- pyproject.toml: project defaults under ``[tool.dmgs]`` (optional)
- Environment variables / .env: default signing identity
- Command-line arguments: override everything above
"""

import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import tomllib
from dotenv import load_dotenv

from dmgs.errors import AppNotFound, BackgroundNotFound
from dmgs.geometry import (
    Position,
    WindowBounds,
    calculate_app_position,
    calculate_applications_position,
    calculate_window_bounds,
)
from dmgs.imaging import read_image_size

DEFAULT_VOLUME_SIZE = "200m"
DEFAULT_ICON_SIZE = 100
SIGN_IDENTITY_ENV = "DMGS_SIGN_IDENTITY"


def app_name_from_path(app_path: str) -> str:
    """Derive the volume/app name from a bundle path (``Foo.app`` -> ``Foo``)."""
    return Path(app_path.rstrip("/")).name.removesuffix(".app")


@dataclass(frozen=True)
class DMGConfiguration:
    """Everything one DMG build needs, resolved once up front.

    Use :meth:`create` rather than the constructor so that paths are
    validated and missing geometry is derived from the background image.
    """

    app_name: str
    app_path: str
    background_path: str
    output_directory: str
    volume_size: str
    icon_size: int
    window_bounds: WindowBounds
    app_position: Position
    applications_position: Position
    signing_identity: str | None = None

    @classmethod
    def create(
        cls,
        app_path: str,
        background_path: str,
        *,
        name: str | None = None,
        output_directory: str | None = None,
        volume_size: str = DEFAULT_VOLUME_SIZE,
        icon_size: int = DEFAULT_ICON_SIZE,
        window_bounds: tuple[int, int, int, int] | None = None,
        app_position: tuple[int, int] | None = None,
        applications_position: tuple[int, int] | None = None,
        signing_identity: str | None = None,
        image_size_reader: Callable[[str], tuple[int, int]] = read_image_size,
    ) -> "DMGConfiguration":
        """Validate inputs and build the configuration.

        Args:
            app_path: Path to the .app bundle
            background_path: Path to the background image
            name: Volume name (defaults to the bundle name without ``.app``)
            output_directory: Directory for the final DMG (defaults to cwd)
            volume_size: Capacity passed to ``hdiutil create -size``
            icon_size: Finder icon size in points
            window_bounds: Explicit (left, top, right, bottom)
            app_position: Explicit app icon center
            applications_position: Explicit Applications shortcut center
            signing_identity: Code signing identity, or None to skip signing
            image_size_reader: Returns (width, height) of an image file

        Raises:
            AppNotFound: If the app bundle does not exist
            BackgroundNotFound: If the background is missing or unreadable
        """
        if not os.path.exists(app_path):
            raise AppNotFound(app_path)
        if not os.path.exists(background_path):
            raise BackgroundNotFound(background_path)

        # Read even when all geometry is explicit, so a broken background fails here
        width, height = image_size_reader(background_path)
        if window_bounds is None:
            window_bounds = calculate_window_bounds(width, height)
        if app_position is None:
            app_position = calculate_app_position(width, height)
        if applications_position is None:
            applications_position = calculate_applications_position(width, height)

        return cls(
            app_name=name or app_name_from_path(app_path),
            app_path=app_path,
            background_path=background_path,
            output_directory=output_directory or os.getcwd(),
            volume_size=volume_size,
            icon_size=icon_size,
            window_bounds=WindowBounds(*window_bounds),
            app_position=Position(*app_position),
            applications_position=Position(*applications_position),
            signing_identity=signing_identity or None,
        )

    @property
    def output_path(self) -> str:
        """Final compressed DMG."""
        return f"{self.output_directory}/{self.app_name}.dmg"

    @property
    def temp_dmg_path(self) -> str:
        """Read-write working image, removed after conversion."""
        return f"{self.output_directory}/{self.app_name}-temp.dmg"

    @property
    def volume_mount_path(self) -> str:
        """Where ``hdiutil attach`` mounts the working image."""
        return f"/Volumes/{self.app_name}"

    @property
    def app_file_name(self) -> str:
        return Path(self.app_path.rstrip("/")).name

    @property
    def background_file_name(self) -> str:
        return Path(self.background_path).name


@dataclass(frozen=True)
class BuildOptions:
    """Timing and recovery knobs for the build pipeline."""

    mount_timeout: float = 10.0
    poll_interval: float = 0.25
    finder_settle_delay: float = 2.0
    rollback: bool = False


@dataclass(frozen=True)
class ProjectSettings:
    """Defaults from ``[tool.dmgs]`` in pyproject.toml and the environment."""

    volume_size: str = DEFAULT_VOLUME_SIZE
    icon_size: int = DEFAULT_ICON_SIZE
    output_dir: str | None = None
    signing_identity: str | None = None
    log_dir: str | None = None
    max_log_files: int = 5
    options: BuildOptions = BuildOptions()

    @classmethod
    def load(cls, project_dir: Path) -> "ProjectSettings":
        """Load settings for builds started from ``project_dir``.

        Both pyproject.toml and .env are optional.
        """
        # Load .env file if it exists (no-op in CI where env vars are set directly)
        env_path = project_dir / ".env"
        if env_path.exists():
            load_dotenv(env_path)

        data: dict = {}
        pyproject_path = project_dir / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                data = tomllib.load(f).get("tool", {}).get("dmgs", {})

        defaults = BuildOptions()
        return cls(
            volume_size=str(data.get("volume_size", DEFAULT_VOLUME_SIZE)),
            icon_size=int(data.get("icon_size", DEFAULT_ICON_SIZE)),
            output_dir=data.get("output_dir"),
            signing_identity=os.environ.get(SIGN_IDENTITY_ENV) or None,
            log_dir=data.get("log_dir"),
            max_log_files=int(data.get("max_log_files", 5)),
            options=BuildOptions(
                mount_timeout=float(data.get("mount_timeout", defaults.mount_timeout)),
                poll_interval=float(data.get("poll_interval", defaults.poll_interval)),
                finder_settle_delay=float(
                    data.get("finder_settle_delay", defaults.finder_settle_delay)
                ),
                rollback=bool(data.get("rollback", defaults.rollback)),
            ),
        )

    def resolve_log_dir(self, output_directory: str) -> Path:
        """Log directory, relative paths being taken from the output directory."""
        if self.log_dir:
            log_dir = Path(self.log_dir)
            if not log_dir.is_absolute():
                log_dir = Path(output_directory) / log_dir
            return log_dir
        return Path(output_directory) / ".dmgs" / "log"
