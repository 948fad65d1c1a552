"""Line reader for rider commands typed in a terminal."""

import asyncio
import os
import sys
from typing import TextIO


class ConsoleInput:
    """Reads lines from a file descriptor without blocking the event loop.

    The read can be cancelled at any time, so a trip that ends on its own does
    not leave a thread stuck waiting for input. Requires an event loop that
    supports ``add_reader`` (any selector loop on POSIX).
    """

    def __init__(self, stream: TextIO | None = None, encoding: str = "utf-8") -> None:
        self._fd = (stream or sys.stdin).fileno()
        self._encoding = encoding
        self._buffer = b""
        self._eof = False

    async def read_line(self) -> str | None:
        """Return the next line without its newline, or None at end of input."""
        while b"\n" not in self._buffer and not self._eof:
            chunk = await self._read_chunk()
            if chunk:
                self._buffer += chunk
            else:
                self._eof = True

        if b"\n" in self._buffer:
            line, self._buffer = self._buffer.split(b"\n", 1)
        elif self._buffer:
            line, self._buffer = self._buffer, b""
        else:
            return None
        return line.decode(self._encoding, errors="replace").rstrip("\r")

    async def _read_chunk(self) -> bytes:
        loop = asyncio.get_running_loop()
        readable: asyncio.Future[None] = loop.create_future()

        def on_readable() -> None:
            if not readable.done():
                readable.set_result(None)

        loop.add_reader(self._fd, on_readable)
        try:
            await readable
        finally:
            loop.remove_reader(self._fd)
        return os.read(self._fd, 4096)
