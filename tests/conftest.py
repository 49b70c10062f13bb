"""Shared fakes and fixtures."""

import plistlib
from pathlib import Path

import pytest
from PIL import Image

from dmgs.config import BuildOptions, DMGConfiguration
from dmgs.geometry import Position, WindowBounds
from dmgs.pipeline import DMGBuilder
from dmgs.utils.process import ExternalCommand, ProcessRunner


class FakeRunner(ProcessRunner):
    """Records commands instead of running them.

    ``responses`` maps a (program, first argument) pair to either an
    (exit_code, output) tuple or a callable returning one.
    """

    def __init__(self, fs: "FakeFileSystem | None" = None) -> None:
        self.fs = fs
        self.calls: list[list[str]] = []
        self.responses: dict[tuple[str, str], object] = {}

    async def execute(self, command: ExternalCommand, on_output=None) -> ExternalCommand:
        self.calls.append([command.program, *command.args])
        key = (command.program, command.args[0] if command.args else "")
        response = self.responses.get(key, (0, ""))
        if callable(response):
            response = response(command)
        command.exit_code, command.output = response

        if command.succeeded and self.fs is not None:
            self.fs.apply(command)
        if on_output and command.output:
            await on_output(command.output)
        return command

    def programs(self) -> list[str]:
        return [" ".join(call[:2]) for call in self.calls]


class FakeFileSystem:
    """In-memory FileSystem."""

    def __init__(self, *paths: str) -> None:
        self.paths = set(paths)
        self.copies: list[tuple[str, str]] = []
        self.mount_path: str | None = None

    def apply(self, command: ExternalCommand) -> None:
        """Mirror the filesystem effect of a successful command."""
        program, args = command.program, command.args
        if program == "hdiutil" and args[0] == "attach":
            if self.mount_path:
                self.paths.add(self.mount_path)
        elif program == "hdiutil" and args[0] == "detach":
            self.paths.discard(args[1])
        elif program == "hdiutil" and args[0] in ("create", "convert"):
            self.paths.add(args[-1])
        elif program in ("cp", "ln"):
            self.paths.add(args[-1])

    def exists(self, path: str) -> bool:
        return path in self.paths

    def remove(self, path: str) -> None:
        self.paths.discard(path)

    def make_dirs(self, path: str) -> None:
        self.paths.add(path)

    def copy_file(self, source: str, destination: str) -> None:
        if source not in self.paths:
            raise FileNotFoundError(source)
        self.copies.append((source, destination))
        self.paths.add(destination)


class FakeClock:
    """Clock and sleep that advance instantly."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def config() -> DMGConfiguration:
    return DMGConfiguration(
        app_name="TestApp",
        app_path="/src/TestApp.app",
        background_path="/src/background.png",
        output_directory="/out",
        volume_size="200m",
        icon_size=100,
        window_bounds=WindowBounds(400, 100, 1000, 522),
        app_position=Position(150, 190),
        applications_position=Position(450, 190),
    )


@pytest.fixture
def fake_fs(config: DMGConfiguration) -> FakeFileSystem:
    fs = FakeFileSystem(config.app_path, config.background_path)
    fs.mount_path = config.volume_mount_path
    return fs


@pytest.fixture
def fake_runner(fake_fs: FakeFileSystem) -> FakeRunner:
    return FakeRunner(fake_fs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def builder(fake_runner: FakeRunner, fake_fs: FakeFileSystem, clock: FakeClock) -> DMGBuilder:
    return DMGBuilder(
        runner=fake_runner,
        fs=fake_fs,
        options=BuildOptions(mount_timeout=1.0, poll_interval=0.25, finder_settle_delay=2.0),
        sleep=clock.sleep,
        clock=clock,
    )


@pytest.fixture
def rollback_builder(fake_runner: FakeRunner, fake_fs: FakeFileSystem, clock: FakeClock) -> DMGBuilder:
    return DMGBuilder(
        runner=fake_runner,
        fs=fake_fs,
        options=BuildOptions(
            mount_timeout=1.0, poll_interval=0.25, finder_settle_delay=2.0, rollback=True
        ),
        sleep=clock.sleep,
        clock=clock,
    )


def make_image(path: Path, width: int, height: int, color=(255, 255, 255, 255)) -> str:
    Image.new("RGBA", (width, height), color).save(path)
    return str(path)


def make_app(root: Path, name: str = "TestApp", info: dict | None = None) -> str:
    app = root / f"{name}.app"
    contents = app / "Contents"
    contents.mkdir(parents=True)
    plist = {
        "CFBundleName": name,
        "CFBundleIdentifier": f"com.test.{name}",
        "CFBundleVersion": "1.0",
    }
    plist.update(info or {})
    with open(contents / "Info.plist", "wb") as f:
        plistlib.dump(plist, f)
    return str(app)
