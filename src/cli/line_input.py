"""Async line source over stdin for the interactive screen."""

import asyncio
import os
import sys
import threading
from typing import Optional, TextIO

import structlog

logger = structlog.get_logger(source="line_input")


class StdinLines:
    """Delivers stdin lines to the event loop; None marks EOF.

    Pollable descriptors (ttys, pipes) are watched with ``loop.add_reader``.
    Anything else is read by a daemon thread posting into the loop, so no
    thread ever sits in the default executor that ``asyncio.run`` joins on exit.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdin
        self._queue: asyncio.Queue = asyncio.Queue()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._fd: Optional[int] = None
        self._pending = b""
        self._eof = False

    @property
    def watching_fd(self) -> bool:
        return self._fd is not None

    def start(self) -> None:
        self._loop = asyncio.get_running_loop()
        try:
            fd = self.stream.fileno()
            self._loop.add_reader(fd, self._on_readable)
        except (AttributeError, OSError, ValueError, NotImplementedError):
            logger.debug("stdin_thread_reader")
            threading.Thread(target=self._pump, name="stdin-lines", daemon=True).start()
            return
        self._fd = fd
        logger.debug("stdin_fd_reader", fd=fd)

    def close(self) -> None:
        if self._fd is not None and self._loop is not None:
            self._loop.remove_reader(self._fd)
            self._fd = None

    async def read_line(self) -> Optional[str]:
        if self._eof:
            return None
        line = await self._queue.get()
        if line is None:
            self._eof = True
        return line

    def _on_readable(self) -> None:
        chunk = os.read(self._fd, 4096)
        if not chunk:
            if self._pending:
                self._queue.put_nowait(self._pending.decode(errors="replace"))
                self._pending = b""
            self._queue.put_nowait(None)
            self.close()
            return
        self._pending += chunk
        while b"\n" in self._pending:
            line, self._pending = self._pending.split(b"\n", 1)
            self._queue.put_nowait(line.decode(errors="replace") + "\n")

    def _pump(self) -> None:
        while True:
            line = self.stream.readline()
            try:
                self._loop.call_soon_threadsafe(self._queue.put_nowait, line or None)
            except RuntimeError:
                # loop already closed
                return
            if not line:
                return
