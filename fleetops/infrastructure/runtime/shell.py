"""Asynchronous shell command execution."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass


@dataclass(frozen=True)
class CommandResult:
    command: str
    returncode: int
    stdout: str
    stderr: str


class CommandFailedError(Exception):
    """Raised when a command exits non-zero or exceeds its timeout."""

    def __init__(self, command: str, message: str):
        self.command = command
        super().__init__(message)


async def run_shell_command(command: str, *, timeout: float) -> CommandResult:
    process = await asyncio.create_subprocess_shell(
        command,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError as exc:
        process.kill()
        await process.wait()
        raise CommandFailedError(
            command, f"Command timed out after {timeout:.0f}s: {command}"
        ) from exc

    result = CommandResult(
        command=command,
        returncode=process.returncode or 0,
        stdout=stdout.decode(errors="replace").strip(),
        stderr=stderr.decode(errors="replace").strip(),
    )
    if result.returncode != 0:
        raise CommandFailedError(
            command,
            f"Command exited with {result.returncode}: {result.stderr or command}",
        )
    return result
