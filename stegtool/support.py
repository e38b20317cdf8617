"""Logging, payload I/O, image loading and saving, and message display."""

from __future__ import annotations

import enum
import inspect
import os
import sys
from dataclasses import dataclass

from PIL import Image as _PilImage

_RED = "\033[1;31m"
_YELLOW = "\033[1;33m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"

_PREVIEW_BYTES = 32

_MODES_BY_CHANNELS = {1: "L", 2: "LA", 3: "RGB", 4: "RGBA"}
_CHANNELS_BY_MODE = {mode: channels for channels, mode in _MODES_BY_CHANNELS.items()}
_GREY_MODES = frozenset({"1", "I", "I;16", "I;16B", "I;16L", "F"})


class LogLevel(enum.Enum):
    """Severity of a log message; NO_LOGS suppresses output."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    NO_LOGS = "NO_LOGS"


_COLOURS = {
    LogLevel.INFO: _BLUE,
    LogLevel.WARNING: _YELLOW,
    LogLevel.ERROR: _RED,
}


def log(level: LogLevel, message: str) -> None:
    """Write ``message`` to stderr, prefixed by the level and the caller's location."""
    if level is LogLevel.NO_LOGS:
        return
    colour = _COLOURS[level]
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    if caller is not None:
        location = f"{os.path.basename(caller.f_code.co_filename)}:{caller.f_lineno}"
    else:
        location = "?:0"
    del frame, caller
    sys.stderr.write(f"{colour}{level.value}{_RESET}: {location}: {message}\n")


def read_payload(path: str | os.PathLike | None) -> bytes:
    """Read all bytes from ``path``, or from standard input when it is None."""
    if path is None:
        return sys.stdin.buffer.read()
    try:
        with open(path, "rb") as stream:
            return stream.read()
    except OSError as exc:
        raise OSError(f"Failed to open file '{os.fspath(path)}' for reading") from exc


def write_output(path: str | os.PathLike | None, data: bytes) -> None:
    """Write ``data`` to ``path``, or to standard output when it is None."""
    if path is None:
        sys.stdout.flush()
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return
    try:
        stream = open(path, "wb")
    except OSError as exc:
        raise OSError(f"Failed to open file '{os.fspath(path)}' for writing") from exc
    with stream:
        written = stream.write(data)
    if written != len(data):
        raise OSError("Failed to write all data to file")


@dataclass(frozen=True)
class Image:
    """An 8-bit image with interleaved, row-major channels."""

    width: int
    height: int
    channels: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.channels not in _MODES_BY_CHANNELS:
            raise ValueError("channels must be between 1 and 4")
        if self.width < 0 or self.height < 0:
            raise ValueError("image dimensions must not be negative")
        object.__setattr__(self, "pixels", bytes(self.pixels))
        if len(self.pixels) != self.width * self.height * self.channels:
            raise ValueError("pixel data does not match width * height * channels")


def _native_mode(picture: _PilImage.Image) -> str:
    mode = picture.mode
    if mode in _CHANNELS_BY_MODE:
        return mode
    if mode in _GREY_MODES:
        return "L"
    if mode in ("PA", "RGBa", "La") or "transparency" in picture.info:
        return "RGBA"
    return "RGB"


def load_image(path: str | os.PathLike) -> Image:
    """Load an image file, keeping its own number of channels."""
    try:
        with _PilImage.open(path) as picture:
            mode = _native_mode(picture)
            converted = picture if picture.mode == mode else picture.convert(mode)
            converted.load()
            return Image(
                width=converted.width,
                height=converted.height,
                channels=_CHANNELS_BY_MODE[mode],
                pixels=converted.tobytes(),
            )
    except (OSError, ValueError) as exc:
        raise OSError(f"cannot load image '{os.fspath(path)}': {exc}") from exc


def save_png(path: str | os.PathLike, image: Image) -> None:
    """Write ``image`` to ``path`` as a PNG file."""
    expected = image.width * image.height * image.channels
    if len(image.pixels) != expected:
        raise ValueError("pixel data does not match width * height * channels")
    picture = _PilImage.frombytes(
        _MODES_BY_CHANNELS[image.channels], (image.width, image.height), image.pixels
    )
    try:
        picture.save(path, format="PNG")
    except OSError as exc:
        raise OSError(f"cannot save image '{os.fspath(path)}': {exc}") from exc


def describe_message(message: bytes) -> str:
    """Return the line shown for a recovered message.

    Long messages are shown as a hexadecimal preview of their first bytes;
    short ones as text up to the first NUL byte.
    """
    if not message:
        return "No hidden message found in the image."
    if len(message) > _PREVIEW_BYTES:
        preview = message[:_PREVIEW_BYTES].hex()
        return (
            f"Hidden message (first {_PREVIEW_BYTES} bytes): "
            f"{preview}... ({len(message)} bytes total)"
        )
    text = message.split(b"\x00", 1)[0].decode("utf-8", errors="replace")
    return f"Hidden message: {text}"