"""What the build pipeline needs from a user interface."""

from typing import Protocol

from dmgs.steps.base import StepStatus


class BuildUI(Protocol):
    """Receiver for build progress.

    Implemented by the Textual BuildApp and by SimpleUI. Steps are
    numbered from 1 in the order returned by ``get_steps``.
    """

    # Step progress

    async def log_step(self, step_num: int, total: int, name: str) -> None:
        """A step is starting."""
        ...

    async def update_step_status(self, step_num: int, status: StepStatus) -> None:
        ...

    # Messages

    async def log_output(self, text: str) -> None:
        """Raw chunk of hdiutil/osascript/codesign output, possibly a partial line."""
        ...

    def log_success(self, message: str) -> None:
        ...

    def log_warning(self, message: str) -> None:
        """An advisory step failed, or an undo action did."""
        ...

    def log_error(self, message: str) -> None:
        ...

    def log_info(self, message: str) -> None:
        """Neutral note, such as what rollback removed."""
        ...

    def print_summary(
        self,
        steps: list[tuple[str, StepStatus]],
        success: bool,
        output_path: str | None = None,
        build_description: str | None = None,
    ) -> None:
        """Final report once the build has finished or failed.

        Args:
            steps: (step name, final status) for every step, in order
            success: Whether the DMG was produced
            output_path: The finished DMG, only on success
            build_description: e.g. ``"MyApp (signed)"``
        """
        ...
