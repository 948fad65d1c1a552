"""Tests for the console announcer and input adapters."""

import io
import os
from collections.abc import Iterator

import pytest

from blindroute.adapters.console import ConsoleAnnouncer, ConsoleInput


@pytest.fixture
def pipe() -> Iterator[tuple[io.TextIOWrapper, int]]:
    """Create a pipe: a readable stream and the raw write end."""
    read_fd, write_fd = os.pipe()
    reader = os.fdopen(read_fd, "r")
    try:
        yield reader, write_fd
    finally:
        reader.close()


@pytest.mark.asyncio
async def test_announcer_writes_one_line_per_message() -> None:
    """Test that each announcement is printed on its own line."""
    stream = io.StringIO()
    announcer = ConsoleAnnouncer(stream=stream, prefix="> ")

    await announcer.announce("버스가 도착했습니다.")
    await announcer.announce("경로 탐색을 종료합니다.")

    assert stream.getvalue() == "> 버스가 도착했습니다.\n> 경로 탐색을 종료합니다.\n"


@pytest.mark.asyncio
async def test_input_reads_lines_until_eof(pipe: tuple[io.TextIOWrapper, int]) -> None:
    """Given several lines in one write, then each is returned separately and EOF gives None."""
    reader, write_fd = pipe
    os.write(write_fd, "n\r\n2\n강남역\nq".encode())
    os.close(write_fd)
    console_input = ConsoleInput(reader)

    lines = [await console_input.read_line() for _ in range(5)]

    assert lines == ["n", "2", "강남역", "q", None]
