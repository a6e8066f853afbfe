import io as stdio
import os

import pytest

from umkatools.io import Running, UmkaIo


@pytest.fixture
def pipe():
    r, w = os.pipe()
    yield r, w
    for fd in (r, w):
        try:
            os.close(fd)
        except OSError:
            pass


def test_sync_read(pipe):
    r, w = pipe
    os.write(w, b"hello")
    with UmkaIo() as umka_io:
        assert umka_io.read(r, 5) == b"hello"


def test_async_read_gives_same_data(pipe):
    r, w = pipe
    os.write(w, b"kolibri")
    with UmkaIo(Running.YES) as umka_io:
        assert umka_io.read(r, 7) == b"kolibri"


def test_sync_write_round_trip(pipe):
    r, w = pipe
    with UmkaIo(Running.NOT_YET) as umka_io:
        assert umka_io.write(w, b"abc") == 3
        assert umka_io.read(r, 3) == b"abc"


def test_async_write_is_unsupported(pipe):
    _, w = pipe
    with UmkaIo(Running.YES) as umka_io:
        with pytest.raises(stdio.UnsupportedOperation):
            umka_io.write(w, b"x")


def test_switching_to_running_uses_worker(pipe):
    r, w = pipe
    umka_io = UmkaIo()
    os.write(w, b"12")
    assert umka_io.read(r, 1) == b"1"
    umka_io.running = Running.YES
    assert umka_io.read(r, 1) == b"2"
    umka_io.close()


def test_use_after_close_raises(pipe):
    r, _ = pipe
    umka_io = UmkaIo(Running.YES)
    umka_io.close()
    with pytest.raises(ValueError):
        umka_io.read(r, 1)


def test_running_accepts_int():
    assert UmkaIo(2).running is Running.YES