"""
Process command backends for running toktx.

Each backend accumulates arguments the same way and differs only in how the output is
collected:
- BlockingCommand: ``subprocess.run``, blocks the calling thread
- AsyncioCommand: ``asyncio.create_subprocess_exec``, ``get_output()`` is a coroutine
- ThreadPoolCommand: blocking run on a ``ThreadPoolExecutor``, ``get_output()``
  returns a ``concurrent.futures.Future``

Standard input is always closed and standard error is always captured. Standard
output is piped or discarded depending on ``set_stdout``.

Usage:
    command = BlockingCommand("toktx")
    command.init_stdio(subprocess.DEVNULL, subprocess.PIPE).set_stdout(subprocess.PIPE)
    command.add_arg("--t2")
    output = command.get_output()
"""

import asyncio
import concurrent.futures
import subprocess
import sys
import threading
from dataclasses import dataclass
from typing import Optional

from .utils import log_verbose, log_warning

DEFAULT_MAX_WORKERS = 4


@dataclass(frozen=True)
class ProcessOutput:
    """Exit status and captured output of a finished process."""

    returncode: int
    stdout: bytes
    stderr: bytes

    @property
    def success(self) -> bool:
        return self.returncode == 0


def _creationflags() -> int:
    # Keep a console window from flashing up for every conversion on Windows
    return subprocess.CREATE_NO_WINDOW if sys.platform == "win32" else 0


class CommandLike:
    """
    Argument accumulator for one toktx invocation.

    Attributes:
        program: Executable name or path.
        args: Tokens added so far, in insertion order.
    """

    BLOCKING = True

    def __init__(self, program: str):
        self.program = program
        self.args: list[str] = []
        self.stdin = subprocess.DEVNULL
        self.stderr = subprocess.PIPE
        self.stdout = subprocess.PIPE

    def init_stdio(self, stdin, stderr) -> "CommandLike":
        self.stdin = stdin
        self.stderr = stderr
        return self

    def set_stdout(self, stdout) -> "CommandLike":
        self.stdout = stdout
        return self

    def add_arg(self, token: str) -> None:
        self.args.append(token)

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def get_output(self):
        raise NotImplementedError

    def _run(self) -> ProcessOutput:
        """Run to completion on the current thread. OSError propagates if the spawn fails."""
        log_verbose("toktx", f"Running: {' '.join(self.argv)}")
        result = subprocess.run(
            self.argv,
            stdin=self.stdin,
            stdout=self.stdout,
            stderr=self.stderr,
            check=False,
            creationflags=_creationflags(),
        )
        return ProcessOutput(result.returncode, result.stdout or b"", result.stderr or b"")


class BlockingCommand(CommandLike):
    """Runs toktx on the calling thread."""

    def get_output(self) -> ProcessOutput:
        return self._run()


class AsyncioCommand(CommandLike):
    """
    Runs toktx as an asyncio subprocess.

    If the awaiting task is cancelled, the child process is killed and reaped before
    the cancellation propagates.
    """

    BLOCKING = False

    async def get_output(self) -> ProcessOutput:
        log_verbose("toktx", f"Running (asyncio): {' '.join(self.argv)}")
        process = await asyncio.create_subprocess_exec(
            *self.argv,
            stdin=self.stdin,
            stdout=self.stdout,
            stderr=self.stderr,
            creationflags=_creationflags(),
        )
        try:
            stdout, stderr = await process.communicate()
        except asyncio.CancelledError:
            if process.returncode is None:
                log_warning("toktx", f"Conversion cancelled, killing toktx (pid {process.pid})")
                process.kill()
                await process.wait()
            raise
        return ProcessOutput(process.returncode, stdout or b"", stderr or b"")


_default_executor: Optional[concurrent.futures.ThreadPoolExecutor] = None
_executor_lock = threading.Lock()


def get_default_executor() -> concurrent.futures.ThreadPoolExecutor:
    """The shared pool used by ThreadPoolCommand when no executor is given."""
    global _default_executor
    with _executor_lock:
        if _default_executor is None:
            _default_executor = concurrent.futures.ThreadPoolExecutor(
                max_workers=DEFAULT_MAX_WORKERS, thread_name_prefix="toktx"
            )
        return _default_executor


class ThreadPoolCommand(CommandLike):
    """
    Runs toktx on a worker thread.

    A future cancelled before its worker picks it up never spawns the process. Once
    running, the conversion cannot be interrupted.
    """

    BLOCKING = False

    def __init__(self, program: str, executor: Optional[concurrent.futures.Executor] = None):
        super().__init__(program)
        self.executor = executor

    def get_output(self) -> concurrent.futures.Future:
        executor = self.executor or get_default_executor()
        return executor.submit(self._run)


BACKENDS = {
    "blocking": BlockingCommand,
    "asyncio": AsyncioCommand,
    "thread": ThreadPoolCommand,
}


def get_backend(backend) -> type:
    """
    Resolve a backend given by name or class.

    Raises:
        ValueError: For an unknown backend name.
    """
    if isinstance(backend, type) and issubclass(backend, CommandLike):
        return backend
    try:
        return BACKENDS[backend]
    except KeyError:
        raise ValueError(f"Unknown backend {backend!r}, expected one of {sorted(BACKENDS)}") from None
