"""Utility modules for the DMG builder."""

from dmgs.utils.fs import FileSystem, LocalFileSystem
from dmgs.utils.logging import BuildLogger, rotate_logs
from dmgs.utils.polling import wait_until
from dmgs.utils.process import ExternalCommand, ProcessRunner
from dmgs.utils.terminal import OutputProcessor

__all__ = [
    "BuildLogger",
    "ExternalCommand",
    "FileSystem",
    "LocalFileSystem",
    "OutputProcessor",
    "ProcessRunner",
    "rotate_logs",
    "wait_until",
]
