import io
import sys

import pytest

from dmgs.cli import parse_args, should_use_tui


def test_create_is_default_command():
    args = parse_args(["MyApp.app", "bg.png"])
    assert args.command == "create"
    assert args.app_path == "MyApp.app"
    assert args.background_path == "bg.png"
    assert args.output is None
    assert args.icon_size is None
    assert args.sign is None


def test_create_options():
    args = parse_args([
        "create", "MyApp.app", "bg.png",
        "-o", "dist", "--icon-size", "128", "--volume-size", "400m",
        "--sign", "Developer ID Application", "-v", "--simple",
    ])
    assert args.output == "dist"
    assert args.icon_size == 128
    assert args.volume_size == "400m"
    assert args.sign == "Developer ID Application"
    assert args.verbose
    assert args.simple


def test_identities_command():
    assert parse_args(["identities"]).command == "identities"


def test_missing_arguments_exit():
    with pytest.raises(SystemExit):
        parse_args([])
    with pytest.raises(SystemExit):
        parse_args(["MyApp.app"])


def test_simple_flag_disables_tui():
    assert not should_use_tui(parse_args(["MyApp.app", "bg.png", "--simple"]))


def test_no_tui_without_tty(monkeypatch):
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    assert not should_use_tui(parse_args(["MyApp.app", "bg.png"]))
