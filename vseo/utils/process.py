"""
Async helpers for running external command-line tools.
"""
import asyncio
import logging
import shutil
from dataclasses import dataclass
from typing import List

from .exceptions import CommandError

READ_CHUNK_SIZE = 64 * 1024


@dataclass
class CommandResult:
    stdout: str
    stderr: str
    returncode: int


def ensure_binary(name: str) -> str:
    """
    Resolve an executable on PATH.

    Raises:
        CommandError: If the executable is not installed
    """
    path = shutil.which(name)
    if not path:
        raise CommandError(name, f"{name} not found in PATH")
    return path


async def _read_stream(stream: asyncio.StreamReader, program: str, max_bytes: int) -> bytes:
    """Collect a pipe chunk by chunk, failing as soon as it grows past max_bytes"""
    chunks = []
    total = 0
    while True:
        chunk = await stream.read(READ_CHUNK_SIZE)
        if not chunk:
            return b"".join(chunks)
        total += len(chunk)
        if total > max_bytes:
            raise CommandError(program, f"{program} output exceeded {max_bytes} bytes")
        chunks.append(chunk)


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
    await proc.wait()


async def run_command(args: List[str], timeout: float, max_output_bytes: int = 1024 * 1024) -> CommandResult:
    """
    Run a command without a shell and wait for it to finish.

    Output is read while the process runs; the process is killed as soon as
    either stream passes max_output_bytes or the timeout expires.

    Args:
        args: Program and its arguments
        timeout: Seconds before the process is killed
        max_output_bytes: Upper bound on captured stdout/stderr (each)

    Returns:
        CommandResult with decoded output

    Raises:
        CommandError: If the program is missing, times out, exits non-zero
            or writes more output than allowed
    """
    program = args[0]
    logging.info(f"Running command: {' '.join(args[:2])}... (timeout={timeout}s)")
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        raise CommandError(program, f"{program} not found: {e}") from e

    readers = [
        asyncio.ensure_future(_read_stream(proc.stdout, program, max_output_bytes)),
        asyncio.ensure_future(_read_stream(proc.stderr, program, max_output_bytes)),
    ]

    async def _communicate():
        out, err = await asyncio.gather(*readers)
        await proc.wait()
        return out, err

    try:
        stdout, stderr = await asyncio.wait_for(_communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        await _kill(proc)
        raise CommandError(program, f"{program} timed out after {timeout}s")
    except CommandError:
        logging.warning(f"{program} exceeded the output limit, killing it")
        await _kill(proc)
        raise
    finally:
        for reader in readers:
            reader.cancel()
        await asyncio.gather(*readers, return_exceptions=True)

    result = CommandResult(
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
        returncode=proc.returncode,
    )
    if result.returncode != 0:
        detail = result.stderr.strip()[-500:] or "no error output"
        raise CommandError(
            program,
            f"{program} exited with code {result.returncode}: {detail}",
            result.returncode,
            result.stderr,
        )
    return result
