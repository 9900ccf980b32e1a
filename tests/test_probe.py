import asyncio
import importlib
import socket

probe_module = importlib.import_module("portscout.scanner.probe")
from portscout.scanner.probe import probe


async def test_probe_open_port(listening_port):
    result = await probe("127.0.0.1", listening_port, 2.0, 0.2)
    assert result.open is True
    assert result.port == listening_port
    assert result.host == "127.0.0.1"
    assert result.error is None
    assert result.banner == ""
    assert result.latency > 0


async def test_probe_captures_banner(banner_port):
    result = await probe("127.0.0.1", banner_port, 2.0, 1.0)
    assert result.open is True
    assert result.banner == "SSH-2.0-OpenSSH_9.6"


async def test_probe_skips_banner_when_disabled(banner_port):
    result = await probe("127.0.0.1", banner_port, 2.0, 1.0, grab_banner=False)
    assert result.open is True
    assert result.banner == ""


async def test_probe_banner_size_limit(banner_port):
    result = await probe("127.0.0.1", banner_port, 2.0, 1.0, banner_size=3)
    assert result.banner == "SSH"


async def test_probe_closed_port(closed_port):
    result = await probe("127.0.0.1", closed_port, 2.0, 0.2)
    assert result.open is False
    assert isinstance(result.error, OSError)
    assert result.banner == ""


async def test_probe_discard_port_closed():
    result = await probe("127.0.0.1", 9, 1.0, 0.2)
    assert result.open is False
    assert result.error is not None


async def test_probe_connect_timeout(monkeypatch):
    async def hang(host, port):
        await asyncio.sleep(10)

    monkeypatch.setattr(probe_module.asyncio, "open_connection", hang)
    result = await probe("192.0.2.1", 80, 0.05, 0.05)
    assert result.open is False
    assert isinstance(result.error, asyncio.TimeoutError)
    assert "timed out" in str(result.error)
    assert result.latency < 5


async def test_probe_unresolvable_host():
    result = await probe("no-such-host.invalid", 80, 2.0, 0.2)
    assert result.open is False
    assert isinstance(result.error, (socket.gaierror, OSError, asyncio.TimeoutError))


async def test_probe_always_closes_connection(monkeypatch):
    closed = []

    class _Writer:
        def close(self):
            closed.append(True)

        async def wait_closed(self):
            return None

    class _Reader:
        async def read(self, n):
            raise ConnectionResetError("reset by peer")

    async def fake_open(host, port):
        return _Reader(), _Writer()

    monkeypatch.setattr(probe_module.asyncio, "open_connection", fake_open)
    result = await probe("127.0.0.1", 22, 1.0, 1.0)
    assert result.open is True
    assert result.banner == ""
    assert closed == [True]


async def test_probe_hostname_that_cannot_be_encoded():
    # a DNS label longer than 63 characters fails IDNA encoding
    host = "a" * 64 + ".example"
    result = await probe(host, 80, 1.0, 0.2)
    assert result.open is False
    assert result.host == host
    assert isinstance(result.error, UnicodeError)
