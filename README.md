# serialcomm

A small host for framed serial communication. Every message travels in a frame.
The frame starts with STX (`0x02`). Then come the payload and a CRC-16-CCITT
checksum of the payload (initial value `0xFFFF`, polynomial `0x1021`, most
significant byte first). The frame ends with ETX (`0x03`). Wherever a byte of
the payload or of the checksum equals STX, ETX or ESC (`0x1B`), it is sent as
ESC followed by the byte XOR `0x20`.

The host needs a POSIX system, because it uses `termios` to set up the port.

## Install

```
pip install .
```

## Library use

```python
from serialcomm.crc import compute_crc16
from serialcomm.encoder import encode
from serialcomm.parser import FrameParser

frame = encode(b"\x01\x02\x03")

parser = FrameParser()
for byte in frame:
    payload = parser.push(byte)
    if payload is not None:
        print("received", payload)

assert compute_crc16(b"123456789") == 0x29B1
```

- `serialcomm.crc.compute_crc16(data)` returns the 16-bit checksum of an
  iterable of byte values. An empty input gives `0xFFFF`.
- `serialcomm.encoder.encode(payload)` returns the complete frame as `bytes`.
- `serialcomm.parser.FrameParser` is a state machine with the states in
  `ParserState` (`WAIT_STX`, `IN_FRAME`, `IN_ESCAPE`). `push(byte)` returns
  the payload as `bytes` when a frame with a valid CRC completes, and `None`
  otherwise. It raises `ValueError` for a value outside 0–255. Bytes before
  an STX are ignored. A frame with a bad checksum, or one too short to hold a
  checksum, is dropped without a word, and the parser waits for the next STX.
  `feed(data)` pushes a whole chunk and returns a list of every payload
  completed in it. `reset()` drops any partial frame.
- `serialcomm.ringbuffer.RingBuffer(capacity)` is a thread-safe fixed-capacity
  FIFO of bytes. `push` raises `BufferFullError` (an `OverflowError`) when the
  buffer is full and `ValueError` for a value outside 0–255. `pop` raises
  `BufferEmptyError` (an `IndexError`) when it is empty. `empty()`, `full()`,
  `capacity()` and `len()` report its state. A capacity that is not positive
  raises `ValueError`.
- `serialcomm.log` writes messages to stdout and to a log file once
  `init(filename)` has been called. The file is truncated on `init`. Lines look
  like `[2024-01-01 12:00:00.123] [info] message`. Until `init` is called,
  `info`, `debug` and `error` do nothing.
- `serialcomm.receiver.ReceiverThread` reads a file descriptor one byte at a
  time on a background thread and pushes each byte into a `RingBuffer`.
  `start(fd, ring)` starts it. Starting it a second time while it runs raises
  `RuntimeError`. `stop()` waits for it to finish. The reader stops by itself on
  a read error or when the ring buffer overflows.
- `serialcomm.host.format_hex(data)` renders bytes as `0x02 0x06 ...`.
  `configure_port(fd)` puts a terminal into raw 115200 8N1 mode without flow
  control. It raises `termios.error` if `fd` is not a terminal.

## Running the host

```
serialcomm-host /dev/ttyUSB0
```

The host opens the given device, or `/dev/ttyUSB0` if none is given. It sets the
port to 115200 8N1 with no flow control. A background receiver thread reads
bytes into a ring buffer of 1024 bytes. The main loop decodes frames from that
buffer. For every valid frame it answers with an encoded ACK frame holding the
single byte `0x06`. All activity goes to `serial_comm.log` in the current
directory and to the console. Press Ctrl+C to stop.

The command exits with status 1 in these cases:

- the device cannot be opened;
- the port cannot be configured;
- writing the ACK fails.

Otherwise it exits with status 0.

## What it does not do

The host only acknowledges frames. It does not pass received payloads on to
anything else; it only logs them. It never sends frames of its own other than
the ACK. The baud rate and line settings are fixed at 115200 8N1.