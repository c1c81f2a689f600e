import os
import termios

import pytest

from serialcomm.encoder import encode
from serialcomm.host import ACK_PAYLOAD, LOG_FILE, configure_port, format_hex, main

_CRTSCTS = getattr(termios, "CRTSCTS", 0)


def test_format_hex_pins_source_layout():
    assert format_hex(b"\x02\x06") == "0x02 0x06"
    assert format_hex([0xAB]) == "0xAB"


def test_format_hex_empty():
    assert format_hex(b"") == ""


def test_format_hex_token_per_byte():
    data = bytes(range(0, 256, 17))
    tokens = format_hex(data).split(" ")
    assert len(tokens) == len(data)
    assert [int(token, 16) for token in tokens] == list(data)
    assert all(token == token[:2] + token[2:].upper() for token in tokens)


def test_ack_frame_layout():
    text = format_hex(encode(ACK_PAYLOAD))
    assert text.startswith("0x02 0x06 ")
    assert text.endswith(" 0x03")


@pytest.fixture
def terminal_fd():
    master_fd, slave_fd = os.openpty()
    try:
        yield slave_fd
    finally:
        os.close(slave_fd)
        os.close(master_fd)


def _make_cooked(fd):
    iflag, oflag, cflag, lflag, _, _, cc = termios.tcgetattr(fd)
    iflag |= termios.IXON | termios.IXOFF | termios.IXANY
    oflag |= termios.OPOST
    cflag = (cflag & ~termios.CSIZE) | termios.CS7 | termios.PARENB | termios.CSTOPB
    lflag |= termios.ECHO | termios.ICANON
    termios.tcsetattr(
        fd,
        termios.TCSANOW,
        [iflag, oflag, cflag, lflag, termios.B9600, termios.B9600, cc],
    )


def test_configure_port_sets_raw_115200_8n1(terminal_fd):
    _make_cooked(terminal_fd)

    configure_port(terminal_fd)

    iflag, oflag, cflag, lflag, ispeed, ospeed, cc = termios.tcgetattr(terminal_fd)
    assert ispeed == termios.B115200
    assert ospeed == termios.B115200
    assert cflag & termios.CSIZE == termios.CS8
    assert cflag & termios.PARENB == 0
    assert cflag & termios.CSTOPB == 0
    assert cflag & _CRTSCTS == 0
    assert cflag & termios.CREAD == termios.CREAD
    assert cflag & termios.CLOCAL == termios.CLOCAL
    assert iflag & (termios.IXON | termios.IXOFF | termios.IXANY) == 0
    assert lflag == 0
    assert oflag == 0
    assert cc[termios.VMIN] == 1
    assert cc[termios.VTIME] == 1


def test_configure_port_rejects_non_terminal():
    read_fd, write_fd = os.pipe()
    try:
        with pytest.raises(termios.error):
            configure_port(read_fd)
    finally:
        os.close(read_fd)
        os.close(write_fd)


def test_main_fails_on_missing_device(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    device = str(tmp_path / "missing-port")
    assert main([device]) == 1
    log_text = (tmp_path / LOG_FILE).read_text(encoding="utf-8")
    assert f"Failed to open serial port: {device}" in log_text


def test_main_fails_on_non_terminal(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    device = tmp_path / "plain-file"
    device.write_bytes(b"")
    assert main([str(device)]) == 1
    log_text = (tmp_path / LOG_FILE).read_text(encoding="utf-8")
    assert "Serial port configured" not in log_text