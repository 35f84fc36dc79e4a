"""
Non-blocking conversions.

The asyncio backend returns coroutines to await on the caller's event loop. The
thread backend returns ``concurrent.futures.Future`` objects (wrap them with
``asyncio.wrap_future`` to await them). Both resolve to the same values as the
blocking ``to_memory``/``to_path``.
"""

import concurrent.futures
import inspect
import os
import subprocess

from ..core.command import get_backend
from ..core.utils import PATH_STDOUT, log_verbose
from .convert import format_output, spawn_failed


class ToKtxConvertAsync:
    """
    A ToKtxConvert bound to a non-blocking backend.

    With the asyncio backend nothing happens until the returned coroutine is awaited.
    With the thread backend the command (including any temp input file) is built
    immediately and only the process run happens on the pool; every failure is
    delivered through the future.
    """

    def __init__(self, base, backend="asyncio", **backend_kwargs):
        self.base = base
        self.backend = get_backend(backend)
        self.backend_kwargs = backend_kwargs
        if self.backend.BLOCKING:
            raise TypeError(f"{self.backend.__name__} is a blocking backend; use to_memory/to_path directly")

    def to_memory(self, cleanup: bool = False):
        """Convert and resolve to the KTX file contents."""
        return self._submit(PATH_STDOUT, subprocess.PIPE, cleanup, capture=True)

    def to_path(self, path, cleanup: bool = False):
        """Convert, have toktx write ``path``, and resolve to None."""
        return self._submit(os.fspath(path), subprocess.DEVNULL, cleanup, capture=False)

    def _submit(self, out_path: str, stdout, cleanup: bool, capture: bool):
        if inspect.iscoroutinefunction(self.backend.get_output):
            return self._run_coroutine(out_path, stdout, cleanup, capture)
        return self._run_future(out_path, stdout, cleanup, capture)

    async def _run_coroutine(self, out_path: str, stdout, cleanup: bool, capture: bool):
        command = self.base.cmd(self.backend, out_path, **self.backend_kwargs).set_stdout(stdout)
        try:
            try:
                output = await command.get_output()
            except OSError as e:
                raise spawn_failed(e, command) from e
        finally:
            if cleanup:
                self.base.cleanup()

        data = format_output(output)
        return data if capture else None

    def _run_future(self, out_path: str, stdout, cleanup: bool, capture: bool) -> concurrent.futures.Future:
        outer = concurrent.futures.Future()
        try:
            command = self.base.cmd(self.backend, out_path, **self.backend_kwargs).set_stdout(stdout)
            inner = command.get_output()
        except Exception as e:
            outer.set_exception(e)
            return outer

        def on_done(f: concurrent.futures.Future):
            if cleanup:
                self.base.cleanup()
            if f.cancelled():
                outer.cancel()
                return
            try:
                error = f.exception()
                if isinstance(error, OSError):
                    raise spawn_failed(error, command) from error
                if error is not None:
                    raise error
                data = format_output(f.result())
            except Exception as e:
                settle_future(outer, error=e)
            else:
                settle_future(outer, result=data if capture else None)

        # Cancelling the returned future cancels the run if it has not started yet
        outer.add_done_callback(lambda o: inner.cancel() if o.cancelled() else None)
        inner.add_done_callback(on_done)
        return outer


def settle_future(future: concurrent.futures.Future, result=None, error=None) -> bool:
    """
    Complete ``future`` with an error or a result unless it is already done.

    The caller may cancel the future from another thread at any moment. A future
    that is already done is left unchanged.

    Returns:
        True if this call completed the future.
    """
    try:
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)
    except concurrent.futures.InvalidStateError:
        log_verbose("toktx", "Conversion finished after its future was cancelled; result dropped.")
        return False
    return True
