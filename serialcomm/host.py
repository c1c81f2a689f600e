"""Serial host: read framed messages from a port and answer each with an ACK frame."""

import argparse
import os
import signal
import termios
import time
from collections.abc import Iterable, Sequence

from serialcomm import log
from serialcomm.encoder import encode
from serialcomm.parser import FrameParser
from serialcomm.receiver import ReceiverThread
from serialcomm.ringbuffer import BufferEmptyError, RingBuffer

DEFAULT_DEVICE = "/dev/ttyUSB0"
LOG_FILE = "serial_comm.log"
RING_CAPACITY = 1024
ACK_PAYLOAD = b"\x06"
_IDLE_SLEEP = 0.1

_IFLAG, _OFLAG, _CFLAG, _LFLAG, _ISPEED, _OSPEED, _CC = range(7)


def format_hex(data: Iterable[int]) -> str:
    """Render bytes as space-separated upper-case ``0xNN`` tokens."""
    return " ".join(f"0x{byte:02X}" for byte in data)


def configure_port(fd: int) -> None:
    """Put the terminal on ``fd`` into raw 115200 8N1 mode without flow control.

    Raises termios.error if ``fd`` is not a terminal or cannot be configured.
    """
    attrs = termios.tcgetattr(fd)
    attrs[_ISPEED] = termios.B115200
    attrs[_OSPEED] = termios.B115200

    cflag = (attrs[_CFLAG] & ~termios.CSIZE) | termios.CS8
    cflag &= ~termios.PARENB
    cflag &= ~termios.CSTOPB
    cflag &= ~getattr(termios, "CRTSCTS", 0)
    cflag |= termios.CLOCAL | termios.CREAD
    attrs[_CFLAG] = cflag

    attrs[_IFLAG] &= ~(termios.IXON | termios.IXOFF | termios.IXANY)
    attrs[_LFLAG] = 0
    attrs[_OFLAG] = 0

    cc = list(attrs[_CC])
    cc[termios.VMIN] = 1
    cc[termios.VTIME] = 1
    attrs[_CC] = cc

    termios.tcsetattr(fd, termios.TCSANOW, attrs)


def _flush_input(fd: int) -> None:
    try:
        termios.tcflush(fd, termios.TCIFLUSH)
    except termios.error:
        return
    log.info("Serial input buffer flushed.")


def _serve(fd: int, device: str) -> int:
    _flush_input(fd)
    log.info(f"Opened serial port: {device}")

    try:
        configure_port(fd)
    except termios.error as exc:
        log.error(f"Failed to configure serial port: {exc}")
        return 1
    _flush_input(fd)
    log.info("Serial port configured: 115200 8N1")

    parser = FrameParser()
    ring = RingBuffer(RING_CAPACITY)
    receiver = ReceiverThread()
    running = True

    def _on_interrupt(signum, frame):
        nonlocal running
        running = False

    previous_handler = signal.signal(signal.SIGINT, _on_interrupt)
    receiver.start(fd, ring)
    try:
        while running:
            try:
                byte = ring.pop()
            except BufferEmptyError:
                log.debug("Ring buffer empty")
                time.sleep(_IDLE_SLEEP)
                continue

            log.info(f"The popped byte is {format_hex((byte,))}")
            log.debug(f"Feeding parser byte {format_hex((byte,))} ({byte})")
            payload = parser.push(byte)
            if payload is None:
                continue

            for value in payload:
                log.debug(f"The read payload byte is {format_hex((value,))}")
            log.info("Payload parsed successfully")

            ack = encode(ACK_PAYLOAD)
            try:
                written = os.write(fd, ack)
            except OSError:
                log.error("Serial write error")
                return 1
            if written == len(ack):
                log.info(f"Sent ACK bytes: {format_hex(ack)}")
            else:
                log.error(f"Partial ACK write: {written}")
            log.info("ACK frame sent")
    finally:
        receiver.stop()
        signal.signal(signal.SIGINT, previous_handler)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the host on a serial device until interrupted; return the exit status."""
    arg_parser = argparse.ArgumentParser(
        prog="serialcomm",
        description="Receive framed messages on a serial port and acknowledge them.",
    )
    arg_parser.add_argument(
        "device", nargs="?", default=DEFAULT_DEVICE, help="serial device path"
    )
    args = arg_parser.parse_args(argv)

    log.init(LOG_FILE)
    log.info("Application started.")

    try:
        fd = os.open(args.device, os.O_RDWR | os.O_NOCTTY)
    except OSError:
        log.error(f"Failed to open serial port: {args.device}")
        return 1

    try:
        status = _serve(fd, args.device)
    finally:
        os.close(fd)
        log.info("Serial port closed")

    if status == 0:
        log.info("Application stopped.")
    return status