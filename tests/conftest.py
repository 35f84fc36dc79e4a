"""Shared fixtures for the toktx-py test suite.

Most conversion tests run against a stand-in ``toktx`` shell script instead of the
real tool. It writes a KTX2 file identifier followed by the input file's bytes to
stdout (outfile ``-``) or to the outfile, and can be steered through environment
variables:

- ``FAKE_TOKTX_ARGS``: file to record argv into, one token per line
- ``FAKE_TOKTX_EXIT``: exit with this status after printing to stderr
- ``FAKE_TOKTX_SLEEP``: replace itself with ``sleep`` for this many seconds
"""

import os
import shutil
import stat
import sys
from pathlib import Path

import pytest
from PIL import Image

from toktx.core import utils

KTX2_IDENTIFIER = b"\xabKTX 20\xbb\r\n\x1a\n"

FAKE_TOKTX = r"""#!/bin/sh
if [ -n "$FAKE_TOKTX_ARGS" ]; then
    : > "$FAKE_TOKTX_ARGS"
    for a in "$@"; do
        printf '%s\n' "$a" >> "$FAKE_TOKTX_ARGS"
    done
fi
if [ -n "$FAKE_TOKTX_SLEEP" ]; then
    exec sleep "$FAKE_TOKTX_SLEEP"
fi
if [ -n "$FAKE_TOKTX_EXIT" ]; then
    printf 'toktx: simulated failure\n' >&2
    exit "$FAKE_TOKTX_EXIT"
fi
out=""
in=""
for a in "$@"; do
    out="$in"
    in="$a"
done
if [ "$out" = "-" ]; then
    printf '\253KTX 20\273\r\n\032\n'
    cat "$in"
else
    { printf '\253KTX 20\273\r\n\032\n'; cat "$in"; } > "$out"
fi
"""

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses a POSIX shell script as toktx")

requires_toktx = pytest.mark.skipif(shutil.which("toktx") is None, reason="toktx is not installed")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep the developer's TOKTX_* settings out of the tests."""
    monkeypatch.delenv(utils.ENV_TOKTX_PATH, raising=False)
    monkeypatch.delenv(utils.ENV_LOG_LEVEL, raising=False)
    for name in ("FAKE_TOKTX_ARGS", "FAKE_TOKTX_EXIT", "FAKE_TOKTX_SLEEP"):
        monkeypatch.delenv(name, raising=False)
    utils.reset_log_level_cache()
    yield
    utils.reset_log_level_cache()


@pytest.fixture
def fake_toktx(tmp_path) -> Path:
    """Path to an executable stand-in for toktx."""
    if sys.platform == "win32":
        pytest.skip("uses a POSIX shell script as toktx")
    script = tmp_path / "bin" / "toktx"
    script.parent.mkdir()
    script.write_text(FAKE_TOKTX)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def recorded_args(tmp_path, monkeypatch):
    """Returns a callable giving the argv the fake toktx last ran with (program excluded)."""
    record = tmp_path / "argv.txt"
    monkeypatch.setenv("FAKE_TOKTX_ARGS", str(record))

    def read():
        return record.read_text().splitlines()

    return read


@pytest.fixture
def source_png(tmp_path) -> Path:
    """A small RGBA PNG with a gradient."""
    image = Image.new("RGBA", (8, 8))
    image.putdata([(x * 32, y * 32, 128, 255) for y in range(8) for x in range(8)])
    path = tmp_path / "source.png"
    image.save(path)
    return path


@pytest.fixture
def source_png_bytes(source_png) -> bytes:
    return source_png.read_bytes()


@pytest.fixture
def track_temp_files():
    """Collects scratch paths to delete after the test."""
    paths = []
    yield paths
    for p in paths:
        if os.path.exists(p):
            os.remove(p)
