"""
Test the external command helpers with the running interpreter as the command
"""
import asyncio
import sys
import time

import pytest

from vseo.utils.exceptions import CommandError
from vseo.utils.process import ensure_binary, run_command


def test_run_command_captures_output():
    result = asyncio.run(run_command([sys.executable, "-c", "print('a|b')"], timeout=30))
    assert result.returncode == 0
    assert result.stdout.strip() == "a|b"


def test_run_command_non_zero_exit():
    with pytest.raises(CommandError, match="exited with code 3: bad input"):
        asyncio.run(run_command(
            [sys.executable, "-c", "import sys; sys.stderr.write('bad input'); sys.exit(3)"],
            timeout=30,
        ))


def test_run_command_timeout():
    with pytest.raises(CommandError, match="timed out"):
        asyncio.run(run_command([sys.executable, "-c", "import time; time.sleep(10)"], timeout=0.5))


def test_run_command_output_limit():
    with pytest.raises(CommandError, match="output exceeded"):
        asyncio.run(run_command([sys.executable, "-c", "print('x' * 5000)"], timeout=30, max_output_bytes=100))


def test_missing_binary():
    with pytest.raises(CommandError, match="not found"):
        ensure_binary("definitely-not-a-real-binary")
    with pytest.raises(CommandError, match="not found"):
        asyncio.run(run_command(["definitely-not-a-real-binary"], timeout=5))


def test_run_command_output_limit_kills_running_process():
    script = "import sys, time; sys.stdout.write('x' * 200000); sys.stdout.flush(); time.sleep(10)"
    started = time.monotonic()
    with pytest.raises(CommandError, match="output exceeded 100 bytes"):
        asyncio.run(run_command([sys.executable, "-c", script], timeout=5, max_output_bytes=100))
    assert time.monotonic() - started < 5
