"""
Conversion orchestration: turns a configuration and an input into a toktx run.

The command line is always ``toktx <options...> <outfile> <infile...>``:
- option tokens from the configuration, in declaration order
- ``-`` when capturing to memory, else the destination path
- the input path token(s), written to a temp file first for in-memory inputs
"""

import os
import subprocess

from ..core.command import BlockingCommand, CommandLike, ProcessOutput, get_backend
from ..core.errors import ExitStatusError, SpawnError
from ..core.utils import PATH_STDOUT, log_error, remove_paths, resolve_program
from .input_source import input_source

LOG_CONTEXT = "toktx"


def spawn_failed(error: OSError, command: CommandLike) -> SpawnError:
    log_error(LOG_CONTEXT, f"Could not start {command.program}: {error}")
    return SpawnError(error)


def format_output(output: ProcessOutput) -> bytes:
    """
    Map a finished process to its stdout bytes.

    Raises:
        ExitStatusError: If the process exited non-zero or was killed by a signal.
    """
    if output.returncode != 0:
        error = ExitStatusError(output.returncode, output.stderr)
        log_error(LOG_CONTEXT, str(error).strip())
        raise error
    return output.stdout


def get_output(command: CommandLike) -> ProcessOutput:
    """Run a blocking command, mapping a failed spawn to SpawnError."""
    try:
        return command.get_output()
    except OSError as e:
        raise spawn_failed(e, command) from e


class ToKtxConvert:
    """
    A pending conversion of one input with one configuration.

    Holds only references to the configuration and input, so it can be reused:
    each ``to_memory``/``to_path`` call spawns a fresh toktx process.

    Attributes:
        config: The ToKtx configuration (read, never modified).
        source: The InputSource to convert.
    """

    def __init__(self, config, source):
        self.config = config
        self.source = input_source(source)

    def __repr__(self):
        return f"ToKtxConvert(source={self.source!r})"

    def cmd(self, backend, out_path: str, **backend_kwargs) -> CommandLike:
        """
        Build the command for one run, without starting it.

        Writing an in-memory input to its temp file happens here.

        Args:
            backend: CommandLike subclass or backend name.
            out_path: ``-`` for stdout, otherwise the destination path.
            **backend_kwargs: Extra backend constructor arguments (e.g. ``executor``).

        Raises:
            SourcePathError: If an in-memory input could not be written.
        """
        program = resolve_program(self.config.path_to_toktx)
        command = get_backend(backend)(program, **backend_kwargs)
        command.init_stdio(subprocess.DEVNULL, subprocess.PIPE)
        self.config.add_unnamed_to(command)
        command.add_arg(out_path)
        self.source.add_args_to(command)
        return command

    def command_args(self, out_path=PATH_STDOUT) -> list[str]:
        """The full argv a run would use. In-memory inputs are written to a temp file."""
        return self.cmd(BlockingCommand, os.fspath(out_path)).argv

    def to_memory(self, backend=BlockingCommand, cleanup: bool = False) -> bytes:
        """
        Convert and return the KTX file contents.

        Args:
            backend: A blocking backend class or name.
            cleanup: Delete temp files written for in-memory inputs once toktx exits.

        Raises:
            SourcePathError, SpawnError, ExitStatusError
        """
        command = self._blocking_cmd(backend, PATH_STDOUT).set_stdout(subprocess.PIPE)
        try:
            output = get_output(command)
        finally:
            if cleanup:
                self.cleanup()
        return format_output(output)

    def to_path(self, path, backend=BlockingCommand, cleanup: bool = False) -> None:
        """
        Convert and have toktx write the KTX file to ``path``.

        Args:
            path: Destination file, passed to toktx unmodified.
            backend: A blocking backend class or name.
            cleanup: Delete temp files written for in-memory inputs once toktx exits.

        Raises:
            SourcePathError, SpawnError, ExitStatusError
        """
        command = self._blocking_cmd(backend, os.fspath(path)).set_stdout(subprocess.DEVNULL)
        try:
            output = get_output(command)
        finally:
            if cleanup:
                self.cleanup()
        format_output(output)

    def future(self, backend="asyncio", **backend_kwargs):
        """
        Run without blocking the caller, using a non-blocking backend.

        See ``asyncio()`` and ``thread()``.
        """
        from .async_conv import ToKtxConvertAsync

        return ToKtxConvertAsync(self, backend, **backend_kwargs)

    def asyncio(self):
        """Run as an asyncio subprocess; the conversion methods return coroutines."""
        return self.future("asyncio")

    def thread(self, executor=None):
        """Run on a thread pool; the conversion methods return concurrent.futures.Future."""
        return self.future("thread", executor=executor)

    def cleanup(self) -> None:
        """Delete any temp files written for this conversion's input."""
        remove_paths(self.source.created_paths, LOG_CONTEXT)

    def _blocking_cmd(self, backend, out_path: str) -> CommandLike:
        backend = get_backend(backend)
        if not backend.BLOCKING:
            raise TypeError(f"{backend.__name__} is not a blocking backend; use future() instead")
        return self.cmd(backend, out_path)
