"""Custom Finder icon for the finished DMG file.

The icon is the app's own icon drawn over a removable-drive icon, so the
DMG looks like "a disk containing this app". This is cosmetic: anything
missing along the way (Info.plist, CFBundleIconFile, the .icns itself)
just means the DMG keeps the default icon.
"""

import os
import plistlib
import tempfile
from pathlib import Path

from PIL import Image, ImageFilter

from dmgs.utils.process import ExternalCommand, OutputCallback, ProcessRunner

CANVAS_SIZE = 512
APP_ICON_SCALE = 0.6
APP_ICON_LIFT = 20
SHADOW_OFFSET = 3
SHADOW_BLUR = 5
SHADOW_OPACITY = 0.3

VOLUMES_DIR = "/Volumes"
VOLUME_ICON_NAME = ".VolumeIcon.icns"
STORAGE_RESOURCES = "/System/Library/Extensions/IOStorageFamily.kext/Contents/Resources"
REMOVABLE_DRIVE_ICON = f"{STORAGE_RESOURCES}/Removable.icns"
INTERNAL_DRIVE_ICON = f"{STORAGE_RESOURCES}/Internal.icns"


def app_icon_path(app_path: str) -> Path | None:
    """Locate the .icns named by CFBundleIconFile, or None if there is none."""
    contents = Path(app_path) / "Contents"
    info_plist = contents / "Info.plist"
    if not info_plist.is_file():
        return None

    try:
        with open(info_plist, "rb") as f:
            info = plistlib.load(f)
    except (OSError, plistlib.InvalidFileException, ValueError):
        return None

    icon_name = info.get("CFBundleIconFile") if isinstance(info, dict) else None
    if not isinstance(icon_name, str) or not icon_name:
        return None
    if not icon_name.endswith(".icns"):
        icon_name = f"{icon_name}.icns"

    icon_path = contents / "Resources" / icon_name
    return icon_path if icon_path.is_file() else None


async def locate_drive_icon(runner: ProcessRunner) -> str | None:
    """Pick the icon used as the backdrop of the composite.

    Prefers a mounted removable or ejectable volume, falling back to the
    root volume. Which icon wins depends on what is mounted right now.
    """
    try:
        volumes = sorted(os.listdir(VOLUMES_DIR))
    except OSError:
        volumes = []

    for name in volumes:
        if name.startswith("."):
            continue
        volume = os.path.join(VOLUMES_DIR, name)
        command = await runner.execute(ExternalCommand("diskutil", ["info", "-plist", volume]))
        if not command.succeeded:
            continue
        try:
            info = plistlib.loads(command.output.encode())
        except (plistlib.InvalidFileException, ValueError):
            continue
        if info.get("Ejectable") or info.get("Removable") or info.get("RemovableMedia"):
            custom = os.path.join(volume, VOLUME_ICON_NAME)
            if os.path.isfile(custom):
                return custom
            if os.path.isfile(REMOVABLE_DRIVE_ICON):
                return REMOVABLE_DRIVE_ICON

    for candidate in (f"/{VOLUME_ICON_NAME}", INTERNAL_DRIVE_ICON):
        if os.path.isfile(candidate):
            return candidate
    return None


def composite_icon(drive_icon: Image.Image | None, app_icon: Image.Image) -> Image.Image:
    """Draw ``app_icon`` centered over ``drive_icon`` on a 512x512 canvas."""
    canvas = Image.new("RGBA", (CANVAS_SIZE, CANVAS_SIZE), (0, 0, 0, 0))
    if drive_icon is not None:
        backdrop = drive_icon.convert("RGBA").resize(
            (CANVAS_SIZE, CANVAS_SIZE), Image.Resampling.LANCZOS
        )
        canvas.alpha_composite(backdrop)

    size = int(CANVAS_SIZE * APP_ICON_SCALE)
    app = app_icon.convert("RGBA").resize((size, size), Image.Resampling.LANCZOS)
    left = (CANVAS_SIZE - size) // 2
    top = (CANVAS_SIZE - size) // 2 - APP_ICON_LIFT

    # Shadow follows the app icon's own outline
    silhouette = Image.new("RGBA", (size, size), (0, 0, 0, 255))
    silhouette.putalpha(app.getchannel("A").point(lambda a: int(a * SHADOW_OPACITY)))
    shadow = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
    shadow.paste(silhouette, (left, top + SHADOW_OFFSET))
    shadow = shadow.filter(ImageFilter.GaussianBlur(radius=SHADOW_BLUR))

    canvas.alpha_composite(shadow)
    canvas.alpha_composite(app, (left, top))
    return canvas


def _load_icon(path: str | Path) -> Image.Image:
    with Image.open(path) as image:
        image.load()
        return image.convert("RGBA")


async def set_dmg_icon(
    dmg_path: str,
    app_path: str,
    runner: ProcessRunner,
    on_output: OutputCallback | None = None,
    drive_icon_locator=locate_drive_icon,
) -> bool:
    """Give the DMG file a composite of the drive icon and the app icon.

    Returns:
        True if an icon was assigned, False if the app has no usable icon

    Raises:
        CommandFailed: If ``fileicon`` fails to assign the icon
    """
    icon_path = app_icon_path(app_path)
    if icon_path is None:
        return False

    try:
        app_icon = _load_icon(icon_path)
    except (OSError, ValueError):
        return False

    drive_icon = None
    drive_icon_path = await drive_icon_locator(runner)
    if drive_icon_path:
        try:
            drive_icon = _load_icon(drive_icon_path)
        except (OSError, ValueError):
            drive_icon = None

    composite = composite_icon(drive_icon, app_icon)

    with tempfile.TemporaryDirectory(prefix="dmgs-icon-") as tmp:
        icns_path = os.path.join(tmp, "VolumeIcon.icns")
        composite.save(icns_path, format="ICNS")
        await runner.run("fileicon", ["set", dmg_path, icns_path], on_output)
    return True
