"""Finder customization script rendered for ``osascript``."""

from dmgs.geometry import Position, WindowBounds

CUSTOMIZATION_TEMPLATE = """\
tell application "Finder"
    tell disk "{volume_name}"
        open
        set current view of container window to icon view
        set toolbar visible of container window to false
        set statusbar visible of container window to false
        set the bounds of container window to {{{bounds.x}, {bounds.y}, {bounds.width}, {bounds.height}}}
        set viewOptions to the icon view options of container window
        set arrangement of viewOptions to not arranged
        set icon size of viewOptions to {icon_size}
        set background picture of viewOptions to file ".background:{background_file_name}"
        set position of item "{app_file_name}" of container window to {{{app.x}, {app.y}}}
        set position of item "Applications" of container window to {{{apps.x}, {apps.y}}}
        close
        open
        update without registering applications
        delay 2
    end tell
end tell"""


def render_customization_script(
    volume_name: str,
    app_file_name: str,
    background_file_name: str,
    icon_size: int,
    window_bounds: WindowBounds,
    app_position: Position,
    applications_position: Position,
) -> str:
    """Render the script that lays out the mounted volume's Finder window.

    Values are inserted verbatim; quotes inside names are not escaped.
    """
    return CUSTOMIZATION_TEMPLATE.format(
        volume_name=volume_name,
        app_file_name=app_file_name,
        background_file_name=background_file_name,
        icon_size=icon_size,
        bounds=WindowBounds(*window_bounds),
        app=Position(*app_position),
        apps=Position(*applications_position),
    )
