"""
Conversion errors raised by toktx-py.

Every failure is raised to the immediate caller; nothing is retried internally.
"""


class ToKtxError(RuntimeError):
    """Base class for all conversion errors."""


class SourcePathError(ToKtxError):
    """
    The input could not be materialized as a file for toktx to read.

    Raised when writing an in-memory buffer to its temporary file fails.

    Attributes:
        error: The underlying OSError.
    """

    def __init__(self, error: OSError):
        self.error = error
        super().__init__(f"Failed to get source path: {error}")


class SpawnError(ToKtxError):
    """
    The toktx process could not be started (e.g. the executable was not found).

    Attributes:
        error: The underlying OSError.
    """

    def __init__(self, error: OSError):
        self.error = error
        super().__init__(f"Error spawning toktx process: {error}")


class ExitStatusError(ToKtxError):
    """
    toktx ran but exited with a non-zero status or was killed by a signal.

    Attributes:
        status: The process return code (negative when killed by a signal on POSIX).
        stderr: Everything the process wrote to stderr, as raw bytes.
    """

    def __init__(self, status: int, stderr: bytes):
        self.status = status
        self.stderr = stderr
        super().__init__(f"Exited with status {status}: {self.stderr_text}")

    @property
    def stderr_text(self) -> str:
        """stderr decoded for display; invalid UTF-8 is replaced, never raised."""
        return self.stderr.decode("utf-8", errors="replace")


class InvalidSwizzleError(ValueError):
    """
    A swizzle string was not exactly four characters from ``rgba01``.

    Attributes:
        value: The rejected text.
        index: Position of the first invalid character, or None if the length was wrong.
    """

    def __init__(self, value: str, index=None):
        self.value = value
        self.index = index
        if index is None:
            message = f"Swizzle must be exactly 4 characters, got {value!r}"
        else:
            message = f"Invalid swizzle character {value[index:index + 1]!r} at index {index} in {value!r}"
        super().__init__(message)
