"""
Tests for the command execution helpers against real subprocesses.
"""

import sys
import time
from pathlib import Path

import pytest

import v2ray_setup
from v2ray_setup import ExecutionError, run_command, stream_command


class TestRunCommand:

    def test_success(self, config):
        result = run_command([sys.executable, "-c", "print('hello')"])
        assert result.returncode == 0
        assert result.stdout.strip() == "hello"

    def test_failure_raises(self, config):
        script = "import sys; sys.stderr.write('boom'); sys.exit(3)"
        with pytest.raises(ExecutionError) as exc:
            run_command([sys.executable, "-c", script])
        assert exc.value.returncode == 3
        assert exc.value.output == "boom"

    def test_failure_unchecked(self, config):
        result = run_command([sys.executable, "-c", "raise SystemExit(4)"], check=False)
        assert result.returncode == 4

    def test_missing_executable(self, config):
        with pytest.raises(ExecutionError) as exc:
            run_command(["definitely-not-a-real-binary-v2ray"])
        assert exc.value.returncode == 127


class TestStreamCommand:

    def test_output_mirrored_to_log(self, config):
        script = "print('line one'); print('line two')"
        assert stream_command([sys.executable, "-c", script]) == 0

        log = Path(config.LOG_FILE).read_text()
        assert "line one" in log
        assert "line two" in log

    def test_failure_raises(self, config):
        with pytest.raises(ExecutionError) as exc:
            stream_command([sys.executable, "-c", "raise SystemExit(5)"])
        assert exc.value.returncode == 5

    def test_failure_unchecked(self, config):
        code = stream_command([sys.executable, "-c", "raise SystemExit(5)"], check=False)
        assert code == 5


def test_command_exists():
    assert v2ray_setup.command_exists("sh")
    assert not v2ray_setup.command_exists("definitely-not-a-real-binary-v2ray")


class TestStreamCommandOutput:
    """Tests for chunked forwarding of partial lines and raw bytes."""

    def _record_echo(self, monkeypatch):
        chunks = []
        monkeypatch.setattr(
            v2ray_setup, "_echo", lambda text: chunks.append((time.monotonic(), text))
        )
        return chunks

    def test_prompt_without_newline_shown_before_input(self, config, monkeypatch):
        chunks = self._record_echo(monkeypatch)
        script = (
            "import sys, time; sys.stdout.write('Enter port: '); sys.stdout.flush();"
            " time.sleep(1.5); print('done')"
        )
        start = time.monotonic()
        assert stream_command([sys.executable, "-c", script]) == 0

        first_at, first_text = chunks[0]
        assert first_text == "Enter port: "
        assert first_at - start < 1.0
        assert "".join(text for _, text in chunks) == "Enter port: done\n"
        assert "Enter port: done" in Path(config.LOG_FILE).read_text()

    def test_invalid_utf8_replaced(self, config):
        script = "import sys; sys.stdout.buffer.write(b'ok \\xff\\xfe\\n')"
        assert stream_command([sys.executable, "-c", script]) == 0
        assert "ok \ufffd\ufffd" in Path(config.LOG_FILE).read_text(encoding="utf-8")

    def test_child_killed_when_interrupted(self, config, monkeypatch):
        def interrupt(text):
            raise KeyboardInterrupt

        monkeypatch.setattr(v2ray_setup, "_echo", interrupt)
        script = "import time; print('working', flush=True); time.sleep(30)"
        start = time.monotonic()
        with pytest.raises(KeyboardInterrupt):
            stream_command([sys.executable, "-c", script])
        assert time.monotonic() - start < 10
