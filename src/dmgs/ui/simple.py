"""Plain colored output for --simple mode and non-TTY runs."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from dmgs.steps.base import StepStatus

if TYPE_CHECKING:
    from dmgs.utils.logging import BuildLogger


# ANSI color codes
BLUE = "\033[0;34m"
CYAN = "\033[0;36m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
RED = "\033[0;31m"
DIM = "\033[2m"
NC = "\033[0m"  # No color

STATUS_LABELS = {
    StepStatus.SUCCESS: ("[SUCCESS]", GREEN),
    StepStatus.WARNING: ("[WARNING]", YELLOW),
    StepStatus.FAILED: ("[FAILED ]", RED),
    StepStatus.RUNNING: ("[RUNNING]", YELLOW),
    StepStatus.SKIPPED: ("[SKIPPED]", DIM),
    StepStatus.PENDING: ("[PENDING]", DIM),
}


def status_label(status: StepStatus) -> str:
    """Fixed-width status tag without color."""
    return STATUS_LABELS[status][0]


def status_color(status: StepStatus) -> str:
    """ANSI color code for a status tag."""
    return STATUS_LABELS[status][1]


class SimpleUI:
    """Line-oriented output handler.

    Colors are only emitted when stdout is a TTY. Everything printed is
    also written, uncolored, to the build log when one is attached.
    """

    def __init__(self, logger: BuildLogger | None = None) -> None:
        self.is_tty = sys.stdout.isatty()
        self.logger = logger

    def _color(self, code: str) -> str:
        return code if self.is_tty else ""

    def _emit(self, plain: str, color: str = "") -> None:
        """Print ``plain`` (colored on a TTY) and record it in the log."""
        if color and self.is_tty:
            print(f"{color}{plain}{NC}")
        else:
            print(plain)
        if self.logger:
            self.logger.write_line(plain)

    async def log_output(self, text: str) -> None:
        print(text, end="", flush=True)
        if self.logger:
            self.logger.write(text)

    async def log_step(self, step_num: int, total: int, name: str) -> None:
        print()
        if self.logger:
            self.logger.write("\n")
        self._emit(f"[{step_num}/{total}] {name}", CYAN)

    async def update_step_status(self, step_num: int, status: StepStatus) -> None:
        # Statuses are only shown in the summary
        pass

    def log_success(self, message: str) -> None:
        self._emit(f"  ✓ {message}", GREEN)

    def log_warning(self, message: str) -> None:
        self._emit(f"  ! WARNING: {message}", YELLOW)

    def log_error(self, message: str) -> None:
        self._emit(f"  ✗ ERROR: {message}", RED)

    def log_info(self, message: str) -> None:
        self._emit(message, BLUE)

    def print_summary(
        self,
        steps: list[tuple[str, StepStatus]],
        success: bool,
        output_path: str | None = None,
        build_description: str | None = None,
    ) -> None:
        """Print final build summary.

        Args:
            steps: List of (step_name, status) tuples
            success: Whether build succeeded
            output_path: Path to output file (if successful)
            build_description: Description of the build
        """
        print()
        self._emit("=== Build Summary ===", CYAN)

        # Calculate max step name length for alignment
        max_len = max(len(name) for name, _ in steps) if steps else 0

        for i, (name, status) in enumerate(steps, 1):
            tag = status_label(status)
            line = f"{self._color(status_color(status))}{tag}{self._color(NC)}"
            print(f"{line} [{i}/{len(steps)}] {name:<{max_len}}")
            if self.logger:
                self.logger.write_line(f"{tag} [{i}/{len(steps)}] {name}")

        print()
        if success:
            self._emit("=== Build Complete ===", GREEN)
            if output_path:
                self._emit(f"Output: {output_path}", BLUE)
            if build_description:
                self._emit(f"Build: {build_description}", BLUE)
        else:
            self._emit("=== Build Failed ===", RED)
