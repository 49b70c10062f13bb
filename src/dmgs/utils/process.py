"""Asynchronous execution of the external tools the build drives.

Every command runs to completion before the next one starts. Standard
output and standard error are merged into a single stream, which is both
forwarded to an optional callback and kept for error reporting.
"""

import asyncio
import codecs
import shlex
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from dmgs.errors import CommandFailed, ScriptFailed

OSASCRIPT = "osascript"
READ_CHUNK_SIZE = 4096

OutputCallback = Callable[[str], Awaitable[None]]


@dataclass
class ExternalCommand:
    """One invocation of an external program and what it produced."""

    program: str
    args: list[str] = field(default_factory=list)
    output: str = ""
    exit_code: int | None = None

    @property
    def command_line(self) -> str:
        """Shell-quoted command line for messages."""
        return shlex.join([self.program, *self.args])

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class ProcessRunner:
    """Runs external programs one at a time and checks their exit status."""

    async def execute(
        self,
        command: ExternalCommand,
        on_output: OutputCallback | None = None,
    ) -> ExternalCommand:
        """Run ``command`` and record its merged output and exit code.

        Does not raise on a non-zero exit status. A program that cannot be
        started is reported as exit code 127.
        """
        try:
            process = await asyncio.create_subprocess_exec(
                command.program,
                *command.args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except FileNotFoundError:
            command.output = f"{command.program}: command not found\n"
            command.exit_code = 127
            return command

        # Chunks, not lines: a single line may exceed the stream reader limit
        chunks: list[str] = []
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        if process.stdout:
            while True:
                data = await process.stdout.read(READ_CHUNK_SIZE)
                text = decoder.decode(data, final=not data)
                if text:
                    chunks.append(text)
                    if on_output:
                        await on_output(text)
                if not data:
                    break

        await process.wait()
        command.output = "".join(chunks)
        command.exit_code = process.returncode or 0
        return command

    async def run(
        self,
        program: str,
        args: list[str],
        on_output: OutputCallback | None = None,
    ) -> None:
        """Run a program and fail on a non-zero exit status.

        Raises:
            CommandFailed: Carrying the command line and its full output
        """
        await self.capture(program, args, on_output)

    async def capture(
        self,
        program: str,
        args: list[str],
        on_output: OutputCallback | None = None,
    ) -> str:
        """Run a program and return its merged output.

        Raises:
            CommandFailed: If the program exits with a non-zero status
        """
        command = await self.execute(ExternalCommand(program, list(args)), on_output)
        if not command.succeeded:
            raise CommandFailed(command.command_line, command.output)
        return command.output

    async def run_script(
        self,
        script: str,
        on_output: OutputCallback | None = None,
    ) -> None:
        """Run an AppleScript through ``osascript -e``.

        Raises:
            ScriptFailed: If osascript exits with a non-zero status
        """
        command = await self.execute(ExternalCommand(OSASCRIPT, ["-e", script]), on_output)
        if not command.succeeded:
            raise ScriptFailed(command.output)
