from dmgs.utils.logging import BuildLogger, get_log_path, rotate_logs, strip_ansi


def test_log_paths(tmp_path):
    assert get_log_path(tmp_path) == tmp_path / "build.log"
    assert get_log_path(tmp_path, 2) == tmp_path / "build.log.2"


def test_rotation_keeps_limit(tmp_path):
    for i in range(4):
        with BuildLogger(tmp_path, max_logs=3) as logger:
            logger.write_line(f"build {i}")

    assert get_log_path(tmp_path).read_text() == "build 3\n"
    assert get_log_path(tmp_path, 1).read_text() == "build 2\n"
    assert get_log_path(tmp_path, 2).read_text() == "build 1\n"
    assert not get_log_path(tmp_path, 3).exists()


def test_rotate_creates_directory(tmp_path):
    log_dir = tmp_path / ".dmgs" / "log"
    rotate_logs(log_dir)
    assert log_dir.is_dir()


def test_log_is_uncolored(tmp_path):
    with BuildLogger(tmp_path) as logger:
        logger.write("\033[32m✓ DMG created\033[0m\n")
        logger.write_line("done")

    assert get_log_path(tmp_path).read_text(encoding="utf-8") == "✓ DMG created\ndone\n"


def test_write_before_start_is_ignored(tmp_path):
    logger = BuildLogger(tmp_path)
    logger.write("lost")
    logger.close()
    assert not get_log_path(tmp_path).exists()


def test_strip_ansi():
    assert strip_ansi("\033[1;33mwarn\033[0m") == "warn"
