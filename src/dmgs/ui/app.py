"""Textual TUI for the DMG builder.

Shows the build steps in a table above a scrolling command log. When the
app exits, the collected output and the summary are printed to the real
terminal so they stay in the scrollback.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from textual.app import App, ComposeResult
from textual.containers import Container, Vertical
from textual.widgets import DataTable, Footer, Header, RichLog, Static

from dmgs.steps.base import StepStatus
from dmgs.ui.simple import CYAN, GREEN, NC, RED, YELLOW, status_color, status_label
from dmgs.utils.terminal import OutputProcessor

if TYPE_CHECKING:
    from dmgs.utils.logging import BuildLogger


STATUS_MARKUP = {
    StepStatus.SUCCESS: "green",
    StepStatus.WARNING: "yellow",
    StepStatus.FAILED: "red",
    StepStatus.RUNNING: "yellow",
    StepStatus.SKIPPED: "dim",
    StepStatus.PENDING: "dim",
}


class BuildApp(App):
    """Textual TUI showing DMG build progress."""

    CSS = """
    #header-container {
        height: auto;
        max-height: 50%;
    }

    #title {
        text-align: center;
        text-style: bold;
        padding: 1;
        background: $primary;
    }

    #steps-table {
        height: auto;
        max-height: 15;
        margin: 0 1;
    }

    #output-container {
        height: 1fr;
        margin: 0 1 1 1;
        border: solid $primary;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("ctrl+c", "quit", "Quit"),
    ]

    def __init__(
        self,
        build_description: str,
        step_names: list[str],
        on_ready: Callable[[], None] | None = None,
        logger: BuildLogger | None = None,
    ) -> None:
        """Initialize the build app.

        Args:
            build_description: Human-readable build description
            step_names: Names of the steps, in order
            on_ready: Callback to invoke once the UI is mounted
            logger: Optional build logger for saving output to file
        """
        super().__init__()
        self.build_description = build_description
        self.step_names = list(step_names)
        self._on_ready = on_ready
        self.logger = logger

        # Replayed to the terminal on exit
        self.output_buffer: list[str] = []
        self.output_processor = OutputProcessor()
        self._summary: list[str] = []
        self._mounted_ready = False

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="header-container"):
            yield Static(f"dmgs - {self.build_description}", id="title")
            yield DataTable(id="steps-table")
        with Vertical(id="output-container"):
            yield RichLog(id="output-log", highlight=True, markup=False)
        yield Footer()

    def on_mount(self) -> None:
        if self._mounted_ready:
            return

        table = self.query_one("#steps-table", DataTable)
        table.add_column("Status", key="status")
        table.add_column("#", key="number")
        table.add_column("Step", key="step")
        total = len(self.step_names)
        for i, name in enumerate(self.step_names):
            table.add_row(self._markup(StepStatus.PENDING), f"[{i + 1}/{total}]", name, key=str(i))

        self._mounted_ready = True
        if self._on_ready:
            # Give the first frame a moment to render
            self.set_timer(0.1, self._on_ready)

    def _write_log(self, text: str) -> None:
        """Append a line to the on-screen log if the widget exists yet."""
        if not self._mounted_ready:
            return
        self.query_one("#output-log", RichLog).write(text)

    def _record(self, colored: str, plain: str) -> None:
        self.output_buffer.append(colored + "\n")
        if self.logger:
            self.logger.write_line(plain)
        self._write_log(colored)

    async def log_output(self, text: str) -> None:
        self.output_buffer.append(text)
        if self.logger:
            self.logger.write(text)
        processed = self.output_processor.process(text)
        if processed:
            self._write_log(processed.rstrip("\n"))

    async def log_step(self, step_num: int, total: int, name: str) -> None:
        self._record(f"\n{CYAN}[{step_num}/{total}] {name}{NC}", f"\n[{step_num}/{total}] {name}")

    async def update_step_status(self, step_num: int, status: StepStatus) -> None:
        if not self._mounted_ready or not 0 < step_num <= len(self.step_names):
            return
        table = self.query_one("#steps-table", DataTable)
        table.update_cell(str(step_num - 1), "status", self._markup(status))

    def log_success(self, message: str) -> None:
        self._record(f"  {GREEN}✓ {message}{NC}", f"  ✓ {message}")

    def log_warning(self, message: str) -> None:
        self._record(f"  {YELLOW}! WARNING: {message}{NC}", f"  ! WARNING: {message}")

    def log_error(self, message: str) -> None:
        self._record(f"  {RED}✗ ERROR: {message}{NC}", f"  ✗ ERROR: {message}")

    def log_info(self, message: str) -> None:
        self._record(message, message)

    def print_summary(
        self,
        steps: list[tuple[str, StepStatus]],
        success: bool,
        output_path: str | None = None,
        build_description: str | None = None,
    ) -> None:
        """Prepare the summary; it is printed in on_unmount."""
        max_len = max(len(name) for name, _ in steps) if steps else 0
        lines = [f"\n{CYAN}=== Build Summary ==={NC}"]
        for i, (name, status) in enumerate(steps, 1):
            tag = f"{status_color(status)}{status_label(status)}{NC}"
            lines.append(f"{tag} [{i}/{len(steps)}] {name:<{max_len}}")
        lines.append("")
        if success:
            lines.append(f"{GREEN}=== Build Complete ==={NC}")
            if output_path:
                lines.append(f"Output: {output_path}")
            if build_description:
                lines.append(f"Build: {build_description}")
        else:
            lines.append(f"{RED}=== Build Failed ==={NC}")
        self._summary = lines

        if self.logger:
            for line in lines:
                self.logger.write_line(line)

    def on_unmount(self) -> None:
        """Replay everything to the terminal for scrollback."""
        remaining = self.output_processor.flush()
        if remaining:
            self.output_buffer.append(remaining)
        for chunk in self.output_buffer:
            print(chunk, end="")
        for line in self._summary:
            print(line)

    @staticmethod
    def _markup(status: StepStatus) -> str:
        style = STATUS_MARKUP[status]
        return f"[{style}]{status_label(status)}[/{style}]"
