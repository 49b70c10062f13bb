from pathlib import Path

from PIL import Image

from conftest import FakeRunner, make_app
from dmgs.icon import CANVAS_SIZE, app_icon_path, composite_icon, set_dmg_icon


def add_icon(app: str, name: str = "AppIcon.icns", color=(255, 0, 0, 255)) -> Path:
    resources = Path(app) / "Contents" / "Resources"
    resources.mkdir(exist_ok=True)
    icon = resources / name
    Image.new("RGBA", (256, 256), color).save(icon, format="ICNS")
    return icon


async def no_drive_icon(runner):
    return None


def test_icon_path_from_info_plist(tmp_path):
    app = make_app(tmp_path, info={"CFBundleIconFile": "AppIcon"})
    icon = add_icon(app)
    assert app_icon_path(app) == icon


def test_icon_path_with_extension(tmp_path):
    app = make_app(tmp_path, info={"CFBundleIconFile": "AppIcon.icns"})
    icon = add_icon(app)
    assert app_icon_path(app) == icon


def test_icon_path_missing_pieces(tmp_path):
    assert app_icon_path(str(tmp_path / "Missing.app")) is None

    no_key = make_app(tmp_path, "NoKey")
    assert app_icon_path(no_key) is None

    no_file = make_app(tmp_path, "NoFile", info={"CFBundleIconFile": "AppIcon"})
    assert app_icon_path(no_file) is None


def test_composite_without_drive_icon():
    app_icon = Image.new("RGBA", (256, 256), (255, 0, 0, 255))

    result = composite_icon(None, app_icon)

    assert result.size == (CANVAS_SIZE, CANVAS_SIZE)
    assert result.mode == "RGBA"
    assert result.getpixel((256, 256)) == (255, 0, 0, 255)
    assert result.getpixel((0, 0))[3] == 0


def test_composite_over_drive_icon():
    drive = Image.new("RGBA", (128, 128), (0, 0, 255, 255))
    app_icon = Image.new("RGBA", (256, 256), (255, 0, 0, 255))

    result = composite_icon(drive, app_icon)

    assert result.getpixel((0, 0)) == (0, 0, 255, 255)
    assert result.getpixel((256, 256)) == (255, 0, 0, 255)


async def test_no_app_icon_keeps_default(tmp_path):
    runner = FakeRunner()
    app = make_app(tmp_path)

    assert not await set_dmg_icon("/out/TestApp.dmg", app, runner, drive_icon_locator=no_drive_icon)
    assert runner.calls == []


async def test_unreadable_app_icon_keeps_default(tmp_path):
    runner = FakeRunner()
    app = make_app(tmp_path, info={"CFBundleIconFile": "AppIcon"})
    resources = Path(app) / "Contents" / "Resources"
    resources.mkdir()
    (resources / "AppIcon.icns").write_bytes(b"not an icon")

    assert not await set_dmg_icon("/out/TestApp.dmg", app, runner, drive_icon_locator=no_drive_icon)
    assert runner.calls == []


async def test_icon_assigned_with_fileicon(tmp_path):
    runner = FakeRunner()
    app = make_app(tmp_path, info={"CFBundleIconFile": "AppIcon"})
    add_icon(app)

    assert await set_dmg_icon("/out/TestApp.dmg", app, runner, drive_icon_locator=no_drive_icon)

    assert len(runner.calls) == 1
    program, action, target, icns = runner.calls[0]
    assert (program, action, target) == ("fileicon", "set", "/out/TestApp.dmg")
    assert icns.endswith(".icns")


async def test_drive_icon_used_when_found(tmp_path):
    runner = FakeRunner()
    app = make_app(tmp_path, info={"CFBundleIconFile": "AppIcon"})
    add_icon(app)
    drive = tmp_path / "Removable.icns"
    Image.new("RGBA", (256, 256), (0, 0, 255, 255)).save(drive, format="ICNS")
    located = []

    async def locator(r):
        located.append(r)
        return str(drive)

    assert await set_dmg_icon("/out/TestApp.dmg", app, runner, drive_icon_locator=locator)
    assert located == [runner]
