"""Ctrl+C handling of the interactive ``show`` command in a real process."""

import os
import signal
import subprocess
import sys
import threading
import time
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).parent.parent.parent / "src"


def _collect(stream, sink: list):
    for raw in iter(stream.readline, b""):
        sink.append(raw.decode(errors="replace"))


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals only")
def test_sigint_exits_with_stdin_open(tmp_path):
    config = tmp_path / "catfacts.yaml"
    # Nothing listens on port 9; loads fail fast and the screen stays up
    config.write_text("api:\n  base_url: http://127.0.0.1:9/\n  timeout: 1\n")
    env = dict(os.environ, PYTHONPATH=str(SRC_DIR))

    proc = subprocess.Popen(
        [sys.executable, "-m", "cli.main", "-v", "--config", str(config), "show"],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        cwd=tmp_path,
        env=env,
    )
    stdout, stderr = [], []
    readers = [
        threading.Thread(target=_collect, args=(proc.stdout, stdout), daemon=True),
        threading.Thread(target=_collect, args=(proc.stderr, stderr), daemon=True),
    ]
    for reader in readers:
        reader.start()

    try:
        deadline = time.monotonic() + 20
        while not any("screen_started" in line for line in stderr):
            assert proc.poll() is None, "".join(stderr)
            assert time.monotonic() < deadline, "screen never started"
            time.sleep(0.05)

        proc.send_signal(signal.SIGINT)
        returncode = proc.wait(timeout=10)
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()
        proc.stdin.close()

    for reader in readers:
        reader.join(timeout=5)
    assert returncode == 0, "".join(stderr)
    assert "Bye" in "".join(stdout)
