"""Turn raw command output into whole lines for the TUI log.

RichLog is a text widget, not a terminal emulator, so carriage returns
(progress bars such as ``hdiutil``'s) have to be resolved before display.
ANSI color sequences are left alone; RichLog renders them.
"""


class OutputProcessor:
    """Buffers partial lines and resolves ``\\r`` overwrites."""

    def __init__(self) -> None:
        self.current_line = ""

    def process(self, text: str) -> str:
        """Feed a chunk of output; return the lines it completed.

        Returns:
            Completed lines, each newline-terminated, or "" if none
        """
        completed: list[str] = []
        pending = self.current_line + text.replace("\r\n", "\n")
        *lines, self.current_line = pending.split("\n")
        for line in lines:
            completed.append(self._resolve(line))
        self.current_line = self._resolve(self.current_line)
        return "".join(f"{line}\n" for line in completed)

    def flush(self) -> str:
        """Return the unterminated last line, if any, and reset."""
        line, self.current_line = self.current_line, ""
        return f"{line}\n" if line else ""

    @staticmethod
    def _resolve(line: str) -> str:
        # Text after the last carriage return overwrites the line
        line = line.rsplit("\r", 1)[-1]
        while "\b" in line:
            index = line.index("\b")
            line = line[: max(index - 1, 0)] + line[index + 1 :]
        return line
