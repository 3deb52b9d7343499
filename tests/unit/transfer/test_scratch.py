"""Unit tests for transfer.scratch module."""

import os
import signal
import time

import pytest

from confluence_attach.transfer.scratch import capture_json_lines, scratch_directory


class TestScratchDirectory:
    """Test cases for the scratch_directory context manager."""

    def test_created_under_root_with_pid(self, tmp_path):
        with scratch_directory(str(tmp_path)) as scratch_dir:
            assert scratch_dir.is_dir()
            assert scratch_dir == tmp_path / str(os.getpid())

    def test_removed_on_success(self, tmp_path):
        with scratch_directory(str(tmp_path)) as scratch_dir:
            (scratch_dir / "output").write_text("x")

        assert not scratch_dir.exists()

    def test_removed_on_error(self, tmp_path):
        with pytest.raises(RuntimeError):
            with scratch_directory(str(tmp_path)) as scratch_dir:
                raise RuntimeError("boom")

        assert not scratch_dir.exists()

    def test_removed_on_keyboard_interrupt(self, tmp_path):
        with pytest.raises(KeyboardInterrupt):
            with scratch_directory(str(tmp_path)) as scratch_dir:
                raise KeyboardInterrupt

        assert not scratch_dir.exists()

    @pytest.mark.skipif(not hasattr(signal, "SIGTERM"), reason="no SIGTERM")
    def test_sigterm_exits_and_cleans_up(self, tmp_path):
        """SIGTERM inside the block becomes SystemExit and the directory is removed."""
        with pytest.raises(SystemExit):
            with scratch_directory(str(tmp_path)) as scratch_dir:
                os.kill(os.getpid(), signal.SIGTERM)
                for _ in range(500):
                    time.sleep(0.01)

        assert not scratch_dir.exists()

    @pytest.mark.skipif(not hasattr(signal, "SIGTERM"), reason="no SIGTERM")
    def test_previous_handler_restored(self, tmp_path):
        before = signal.getsignal(signal.SIGTERM)

        with scratch_directory(str(tmp_path)):
            assert signal.getsignal(signal.SIGTERM) is not before

        assert signal.getsignal(signal.SIGTERM) is before


class TestCaptureJsonLines:
    """Test cases for capture_json_lines."""

    def test_keeps_only_json_lines(self, tmp_path):
        body = 'HTTP/1.1 200 OK\nX-Header: 1\n\n{"results": []}\n'

        capture = capture_json_lines(body, tmp_path)

        assert capture.read_text(encoding="utf-8") == '{"results": []}'
        assert capture.name == f"output.{os.getpid()}"
