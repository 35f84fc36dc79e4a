"""End-to-end conversion tests against a stand-in toktx, plus an optional real-toktx run."""

import asyncio
import concurrent.futures
import os
import threading
from pathlib import Path

import pytest
from PIL import Image

from toktx import (
    ExitStatusError,
    OutputFormat,
    SpawnError,
    ToKtx,
    ToKtxError,
    TransferFunction,
    UASTCOptions,
    UASTCQuality,
    convert_many,
    temp_path,
)
from toktx.conv.async_conv import settle_future
from toktx.core import utils

from .conftest import KTX2_IDENTIFIER, requires_toktx


@pytest.fixture
def config(fake_toktx):
    return ToKtx(two_dee=True, encoding=UASTCOptions(quality=UASTCQuality.FASTEST), path_to_toktx=fake_toktx)


class TestCommandLine:
    def test_argv_order(self, config, source_png, fake_toktx, recorded_args):
        config.convert(source_png).to_memory()
        assert recorded_args() == ["--2d", "--t2", "--encode", "uastc", "--uastc_quality", "0", "-", str(source_png)]

    def test_to_path_passes_destination(self, config, source_png, tmp_path, recorded_args):
        dest = tmp_path / "albedo.ktx2"
        config.convert(source_png).to_path(dest)
        assert recorded_args()[-2:] == [str(dest), str(source_png)]

    def test_command_args_without_running(self, fake_toktx, source_png):
        config = ToKtx(levels=2, path_to_toktx=fake_toktx)
        argv = config.convert(source_png).command_args()
        assert argv == [str(fake_toktx), "--levels", "2", "--t2", "-", str(source_png)]

    def test_config_is_not_modified(self, config, source_png):
        before = config.to_args()
        config.convert(source_png).to_memory()
        assert config.to_args() == before


class TestProgramResolution:
    def test_env_var(self, fake_toktx, source_png, monkeypatch):
        monkeypatch.setenv(utils.ENV_TOKTX_PATH, str(fake_toktx))
        assert ToKtx().convert(source_png).command_args()[0] == str(fake_toktx)

    def test_config_overrides_env_var(self, fake_toktx, source_png, monkeypatch):
        monkeypatch.setenv(utils.ENV_TOKTX_PATH, "/nowhere/toktx")
        assert ToKtx(path_to_toktx=fake_toktx).convert(source_png).command_args()[0] == str(fake_toktx)

    def test_default_program_name(self, source_png):
        assert ToKtx().convert(source_png).command_args()[0] == "toktx"


class TestOutputs:
    def test_memory_matches_file(self, config, source_png, source_png_bytes, tmp_path):
        dest = tmp_path / "out.ktx2"
        data = config.convert(source_png).to_memory()
        assert config.convert(source_png).to_path(dest) is None

        assert data.startswith(KTX2_IDENTIFIER)
        assert data == KTX2_IDENTIFIER + source_png_bytes
        assert dest.read_bytes() == data

    def test_bytes_input(self, config, source_png_bytes):
        conversion = config.convert(source_png_bytes)
        data = conversion.to_memory(cleanup=True)
        assert data == KTX2_IDENTIFIER + source_png_bytes

    def test_image_input(self, config):
        image = Image.new("RGB", (2, 2), (0, 128, 255))
        data = config.convert(image).to_memory(cleanup=True)
        assert data.startswith(KTX2_IDENTIFIER)
        assert data[len(KTX2_IDENTIFIER):].startswith(b"\x89PNG")

    def test_all_backends_agree(self, config, source_png):
        blocking = config.convert(source_png).to_memory()
        via_asyncio = asyncio.run(config.convert(source_png).asyncio().to_memory())
        with concurrent.futures.ThreadPoolExecutor(max_workers=2) as executor:
            via_thread = config.convert(source_png).thread(executor).to_memory().result(timeout=30)
        assert blocking == via_asyncio == via_thread

    def test_async_to_path(self, config, source_png, tmp_path):
        asyncio_dest = tmp_path / "asyncio.ktx2"
        thread_dest = tmp_path / "thread.ktx2"
        assert asyncio.run(config.convert(source_png).asyncio().to_path(asyncio_dest)) is None
        assert config.convert(source_png).thread().to_path(thread_dest).result(timeout=30) is None
        assert asyncio_dest.read_bytes() == thread_dest.read_bytes()

    def test_thread_future_can_be_awaited(self, config, source_png):
        async def run():
            return await asyncio.wrap_future(config.convert(source_png).thread().to_memory())

        assert asyncio.run(run()).startswith(KTX2_IDENTIFIER)

    def test_concurrent_conversions_share_config(self, config, source_png):
        with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
            futures = [config.convert(source_png).thread(executor).to_memory() for _ in range(8)]
            results = {f.result(timeout=30) for f in futures}
        assert len(results) == 1


class TestErrors:
    def test_missing_executable(self, source_png, tmp_path):
        config = ToKtx(path_to_toktx=tmp_path / "no-such-toktx")
        with pytest.raises(SpawnError) as exc_info:
            config.convert(source_png).to_memory()
        assert isinstance(exc_info.value.error, OSError)
        assert isinstance(exc_info.value, ToKtxError)

    def test_missing_executable_asyncio(self, source_png, tmp_path):
        config = ToKtx(path_to_toktx=tmp_path / "no-such-toktx")
        with pytest.raises(SpawnError):
            asyncio.run(config.convert(source_png).asyncio().to_memory())

    def test_missing_executable_thread(self, source_png, tmp_path):
        config = ToKtx(path_to_toktx=tmp_path / "no-such-toktx")
        future = config.convert(source_png).thread().to_memory()
        with pytest.raises(SpawnError):
            future.result(timeout=30)

    def test_exit_status(self, config, source_png, monkeypatch):
        monkeypatch.setenv("FAKE_TOKTX_EXIT", "2")
        with pytest.raises(ExitStatusError) as exc_info:
            config.convert(source_png).to_memory()
        assert exc_info.value.status == 2
        assert exc_info.value.stderr == b"toktx: simulated failure\n"
        assert "simulated failure" in str(exc_info.value)

    def test_exit_status_from_missing_input(self, config, tmp_path):
        with pytest.raises(ExitStatusError) as exc_info:
            config.convert(tmp_path / "missing.png").to_memory()
        assert exc_info.value.status != 0
        assert exc_info.value.stderr

    def test_exit_status_thread(self, config, source_png, monkeypatch):
        monkeypatch.setenv("FAKE_TOKTX_EXIT", "1")
        with pytest.raises(ExitStatusError):
            config.convert(source_png).thread().to_path(Path(os.devnull)).result(timeout=30)

    def test_stderr_text_tolerates_invalid_utf8(self):
        error = ExitStatusError(1, b"bad \xff byte")
        assert error.stderr_text == "bad \ufffd byte"

    def test_asyncio_backend_rejected_by_blocking_methods(self, config, source_png):
        with pytest.raises(TypeError):
            config.convert(source_png).to_memory(backend="asyncio")

    def test_blocking_backend_rejected_by_future(self, config, source_png):
        with pytest.raises(TypeError):
            config.convert(source_png).future("blocking")


class TestCleanup:
    def test_temp_files_kept_by_default(self, config, source_png_bytes, track_temp_files):
        conversion = config.convert(source_png_bytes)
        conversion.to_memory()
        paths = conversion.source.created_paths
        track_temp_files.extend(paths)
        assert len(paths) == 1
        assert paths[0].exists()

        conversion.cleanup()
        assert not paths[0].exists()

    def test_cleanup_option(self, config, source_png_bytes, tmp_path):
        conversion = config.convert(source_png_bytes)
        conversion.to_path(tmp_path / "out.ktx2", cleanup=True)
        assert conversion.source.created_paths
        assert not any(p.exists() for p in conversion.source.created_paths)

    def test_cleanup_after_failure(self, config, source_png_bytes, monkeypatch):
        monkeypatch.setenv("FAKE_TOKTX_EXIT", "1")
        conversion = config.convert(source_png_bytes)
        with pytest.raises(ExitStatusError):
            conversion.to_memory(cleanup=True)
        assert not any(p.exists() for p in conversion.source.created_paths)

    def test_cleanup_asyncio(self, config, source_png_bytes):
        conversion = config.convert(source_png_bytes)
        asyncio.run(conversion.asyncio().to_memory(cleanup=True))
        assert conversion.source.created_paths
        assert not any(p.exists() for p in conversion.source.created_paths)

    def test_cleanup_thread(self, config, source_png_bytes):
        conversion = config.convert(source_png_bytes)
        conversion.thread().to_memory(cleanup=True).result(timeout=30)
        assert conversion.source.created_paths
        assert not any(p.exists() for p in conversion.source.created_paths)


class TestCancellation:
    def test_asyncio_cancel_kills_toktx(self, config, source_png, monkeypatch):
        monkeypatch.setenv("FAKE_TOKTX_SLEEP", "30")

        async def run():
            task = asyncio.ensure_future(config.convert(source_png).asyncio().to_memory())
            await asyncio.sleep(0.3)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(asyncio.wait_for(run(), timeout=20))

    def test_cancelled_thread_future_never_starts(self, config, source_png, tmp_path, monkeypatch):
        record = tmp_path / "argv.txt"
        monkeypatch.setenv("FAKE_TOKTX_ARGS", str(record))
        release = threading.Event()

        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
            blocker = executor.submit(release.wait, 30)
            future = config.convert(source_png).thread(executor).to_memory()
            assert future.cancel()
            release.set()
            blocker.result(timeout=30)

        assert future.cancelled()
        assert not record.exists()

    def test_settling_a_cancelled_future_is_a_no_op(self):
        future = concurrent.futures.Future()
        assert future.cancel()

        assert settle_future(future, result=b"data") is False
        assert settle_future(future, error=RuntimeError("late")) is False
        assert future.cancelled()

    def test_settle_future(self):
        done = concurrent.futures.Future()
        assert settle_future(done, result=b"data")
        assert done.result() == b"data"

        failed = concurrent.futures.Future()
        assert settle_future(failed, error=ToKtxError("boom"))
        assert isinstance(failed.exception(), ToKtxError)


class TestConvertMany:
    def test_writes_one_file_per_input(self, config, source_png, source_png_bytes, tmp_path):
        out_dir = tmp_path / "ktx"
        result = convert_many(config, [source_png, source_png_bytes], out_dir, max_workers=2)

        assert result.ok
        assert result.written == [out_dir / "source.ktx2", out_dir / "texture_00001.ktx2"]
        for path in result.written:
            assert path.read_bytes() == KTX2_IDENTIFIER + source_png_bytes

    def test_duplicate_stems_do_not_collide(self, config, source_png, tmp_path):
        result = convert_many(config, [source_png, source_png], tmp_path / "ktx")
        assert len(set(result.written)) == 2

    def test_failures_are_collected(self, config, source_png, tmp_path):
        result = convert_many(config, [source_png, tmp_path / "missing.png"], tmp_path / "ktx")
        assert not result.ok
        assert result.written == [tmp_path / "ktx" / "source.ktx2"]
        assert set(result.failed) == {1}
        assert isinstance(result.failed[1], ExitStatusError)

    def test_empty(self, config, tmp_path):
        result = convert_many(config, [], tmp_path / "ktx")
        assert result.ok
        assert result.written == []


class TestLogging:
    def test_debug_level_logs_command(self, config, source_png, monkeypatch, capsys):
        monkeypatch.setenv(utils.ENV_LOG_LEVEL, "debug")
        utils.reset_log_level_cache()
        config.convert(source_png).to_memory()
        assert "DEBUG: [toktx] Running:" in capsys.readouterr().out

    def test_default_level_is_quiet_on_success(self, config, source_png, capsys):
        config.convert(source_png).to_memory()
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_failure_is_logged_to_stderr(self, config, source_png, monkeypatch, capsys):
        monkeypatch.setenv("FAKE_TOKTX_EXIT", "4")
        with pytest.raises(ExitStatusError):
            config.convert(source_png).to_memory()
        assert "ERROR: [toktx] Exited with status 4" in capsys.readouterr().err


@requires_toktx
@pytest.mark.toktx
class TestRealToktx:
    def test_uastc_2d_srgb_memory_and_temp_path_agree(self, source_png, track_temp_files):
        config = ToKtx(
            two_dee=True,
            assign_oetf=TransferFunction.SRGB,
            output_format=OutputFormat.KTX2,
            encoding=UASTCOptions(quality=UASTCQuality.FASTEST),
        )
        dest = temp_path()
        track_temp_files.append(dest)

        data = config.convert(source_png).to_memory()
        config.convert(source_png).to_path(dest)
        assert data.startswith(KTX2_IDENTIFIER)
        assert dest.read_bytes() == data

    def test_memory_and_path_agree(self, source_png, tmp_path):
        config = ToKtx(two_dee=True)
        dest = tmp_path / "out.ktx2"
        data = config.convert(source_png).to_memory()
        config.convert(source_png).to_path(dest)
        assert dest.read_bytes() == data

    def test_etc1s_from_bytes(self, source_png_bytes):
        config = ToKtx(two_dee=True, encoding="etc1s")
        data = config.convert(source_png_bytes).to_memory(cleanup=True)
        assert data.startswith(KTX2_IDENTIFIER)

    def test_invalid_option_combination_is_exit_status_error(self, source_png):
        config = ToKtx(auto_mipmap=True, genmipmap=True)
        with pytest.raises(ExitStatusError) as exc_info:
            config.convert(source_png).to_memory()
        assert exc_info.value.stderr
