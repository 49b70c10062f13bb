from dmgs.steps import StepStatus
from dmgs.ui.simple import SimpleUI
from dmgs.utils.logging import BuildLogger, get_log_path


async def test_output_mirrored_to_log(tmp_path, capsys):
    with BuildLogger(tmp_path) as logger:
        ui = SimpleUI(logger=logger)
        ui.is_tty = False
        await ui.log_step(1, 2, "Creating temporary disk image...")
        await ui.log_output("\033[32mcreated\033[0m\n")
        ui.log_warning("no icon")

    out = capsys.readouterr().out
    assert "[1/2] Creating temporary disk image..." in out
    assert "! WARNING: no icon" in out

    log = get_log_path(tmp_path).read_text(encoding="utf-8")
    assert "[1/2] Creating temporary disk image...\n" in log
    assert "created\n" in log
    assert "\033" not in log


def test_summary(capsys):
    ui = SimpleUI()
    ui.is_tty = False

    ui.print_summary(
        [("Validating configuration...", StepStatus.SUCCESS), ("Setting DMG icon...", StepStatus.WARNING)],
        success=True,
        output_path="/out/TestApp.dmg",
        build_description="TestApp (unsigned)",
    )

    out = capsys.readouterr().out
    assert "[SUCCESS] [1/2] Validating configuration..." in out
    assert "[WARNING] [2/2] Setting DMG icon..." in out
    assert "=== Build Complete ===" in out
    assert "Output: /out/TestApp.dmg" in out


def test_failed_summary(capsys):
    ui = SimpleUI()
    ui.is_tty = False

    ui.print_summary([("Mounting disk image...", StepStatus.FAILED)], success=False)

    out = capsys.readouterr().out
    assert "[FAILED ] [1/1] Mounting disk image..." in out
    assert "=== Build Failed ===" in out
    assert "Output:" not in out
