"""The ``hide-lsb``, ``show-lsb`` and ``noise-lsb`` subcommands."""

from __future__ import annotations

import random
import re
import struct
import sys
from collections.abc import Sequence

from stegtool.cliargs import ArgumentError, ArgumentKind, ArgumentParser
from stegtool.hamming import hamming_decode, hamming_encode
from stegtool.lsb import BYTE_SIZE, StegError, hide_lsb, show_lsb
from stegtool.support import (
    Image,
    LogLevel,
    describe_message,
    load_image,
    log,
    read_payload,
    save_png,
    write_output,
)

PROGRAM_NAME = "steg"
PROGRAM_VERSION = "v0.1.0"

COMMAND_HIDE_LSB = "hide-lsb"
COMMAND_SHOW_LSB = "show-lsb"
COMMAND_NOISE_LSB = "noise-lsb"

_LENGTH_PREFIX = struct.Struct("<Q")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_int(text: str) -> int:
    """Read a leading decimal integer the lenient way; 0 if there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _parse(parser: ArgumentParser, argv: Sequence[str]) -> bool:
    try:
        parser.parse(argv)
    except ArgumentError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        sys.stdout.write(parser.help_text())
        return False
    return True


def _argv(argv: Sequence[str] | None) -> list[str]:
    return list(sys.argv[1:] if argv is None else argv)


def _add_image(parser: ArgumentParser) -> None:
    parser.add_argument(
        "i", "image", "Path to the image file", ArgumentKind.POSITIONAL, True
    )


def _add_compression(parser: ArgumentParser) -> None:
    parser.add_argument(
        "c", "compression", "Compression level (default: 1)", ArgumentKind.VALUE, False
    )


def _add_ecc(parser: ArgumentParser) -> None:
    parser.add_argument(
        "e", "ecc", "Use Error Correction (default: false)", ArgumentKind.FLAG, False
    )


def _load(path: str) -> Image | None:
    try:
        return load_image(path)
    except OSError as exc:
        log(LogLevel.ERROR, f"Error loading image: {exc}")
        return None


def _save(path: str, image: Image) -> bool:
    try:
        save_png(path, image)
    except (OSError, ValueError) as exc:
        log(LogLevel.ERROR, f"Error saving modified image: {exc}")
        return False
    return True


def hide_lsb_command(argv: Sequence[str] | None = None) -> int:
    """Hide a payload in the low bits of an image; ``argv[0]`` is the command name."""
    parser = ArgumentParser(
        f"{PROGRAM_NAME} {COMMAND_HIDE_LSB}", "Hide a message in an image", PROGRAM_VERSION
    )
    _add_image(parser)
    parser.add_argument(
        "o",
        "output",
        "Path to save the modified image (default: stdout)",
        ArgumentKind.VALUE,
        True,
    )
    parser.add_argument(
        "p",
        "payload",
        "Path to the payload file (default: stdin)",
        ArgumentKind.VALUE,
        False,
    )
    _add_compression(parser)
    _add_ecc(parser)
    if not _parse(parser, _argv(argv)):
        return 1

    image_path = parser.get_value("image")
    output_path = parser.get_value("output")
    payload_path = parser.get_value("payload")
    compression = _to_int(parser.get_value("compression", "1"))
    ecc = parser.get_flag("ecc")

    image = _load(image_path)
    if image is None:
        return 1

    try:
        payload = read_payload(payload_path)
    except OSError as exc:
        log(LogLevel.ERROR, f"Error reading payload file: {exc}")
        return 1

    data = _LENGTH_PREFIX.pack(len(payload)) + payload
    if ecc:
        data = hamming_encode(data)

    try:
        pixels = hide_lsb(image.pixels, data, compression)
    except StegError as exc:
        log(LogLevel.ERROR, f"Error hiding message in image: {exc}")
        return 1

    modified = Image(image.width, image.height, image.channels, bytes(pixels))
    if not _save(output_path, modified):
        return 1

    log(LogLevel.INFO, f"Message hidden successfully in {output_path}")
    return 0


def show_lsb_command(argv: Sequence[str] | None = None) -> int:
    """Recover a payload hidden by ``hide-lsb``; ``argv[0]`` is the command name."""
    parser = ArgumentParser(
        f"{PROGRAM_NAME} {COMMAND_SHOW_LSB}",
        "Show a hidden message in an image",
        PROGRAM_VERSION,
    )
    _add_image(parser)
    parser.add_argument(
        "o",
        "output",
        "Path to save the modified image (default: stdout)",
        ArgumentKind.VALUE,
        False,
    )
    _add_compression(parser)
    _add_ecc(parser)
    if not _parse(parser, _argv(argv)):
        return 1

    image_path = parser.get_value("image")
    output_path = parser.get_value("output")
    compression = _to_int(parser.get_value("compression", "1"))
    ecc = parser.get_flag("ecc")

    image = _load(image_path)
    if image is None:
        return 1

    try:
        if compression <= 0:
            raise StegError("Invalid compression value")
        length = len(image.pixels) // BYTE_SIZE * compression
        data = show_lsb(image.pixels, length, compression)
    except StegError as exc:
        log(LogLevel.ERROR, f"Error showing message from image: {exc}")
        return 1

    if ecc:
        data = hamming_decode(data)

    if len(data) < _LENGTH_PREFIX.size:
        log(LogLevel.ERROR, "Error showing message from image: image is too small")
        return 1
    (message_length,) = _LENGTH_PREFIX.unpack_from(data)
    body = data[_LENGTH_PREFIX.size :]
    if message_length > len(body):
        log(
            LogLevel.ERROR,
            "Error showing message from image: "
            "hidden message length exceeds the data in the image",
        )
        return 1
    message = body[:message_length]

    if message and output_path is not None:
        try:
            write_output(output_path, message)
        except OSError as exc:
            log(LogLevel.ERROR, f"Error writing message to output file: {exc}")
            return 1
        log(LogLevel.INFO, f"Hidden message written to {output_path}")
    else:
        print(describe_message(message))
    return 0


def add_lsb_noise(pixels: bytes, compression: int, rng: random.Random) -> bytes:
    """Flip random low bits, at most one in each window of ``8 // compression`` bytes.

    Each window is touched with probability one half; the flipped bit lies
    among the ``compression`` lowest bits of one byte of the window.
    """
    if not 0 < compression <= BYTE_SIZE:
        raise ValueError("compression must be between 1 and 8")
    stride = BYTE_SIZE // compression
    result = bytearray(pixels)
    for start in range(0, len(result), stride):
        if rng.random() >= 0.5:
            index = start + rng.randrange(min(stride, len(result) - start))
            result[index] ^= 1 << rng.randrange(compression)
    return bytes(result)


def noise_lsb_command(argv: Sequence[str] | None = None) -> int:
    """Add random low-bit noise to an image; ``argv[0]`` is the command name."""
    parser = ArgumentParser(
        f"{PROGRAM_NAME} {COMMAND_NOISE_LSB}", "Simulate noise in LSB", PROGRAM_VERSION
    )
    _add_image(parser)
    parser.add_argument(
        "o",
        "output",
        "Path to save the modified image (default: stdout)",
        ArgumentKind.VALUE,
        True,
    )
    _add_compression(parser)
    if not _parse(parser, _argv(argv)):
        return 1

    image_path = parser.get_value("image")
    output_path = parser.get_value("output")
    compression = _to_int(parser.get_value("compression", "1"))

    image = _load(image_path)
    if image is None:
        return 1

    try:
        pixels = add_lsb_noise(image.pixels, compression, random.Random())
    except ValueError as exc:
        log(LogLevel.ERROR, f"Error adding noise: {exc}")
        return 1

    if not _save(output_path, Image(image.width, image.height, image.channels, pixels)):
        return 1

    log(LogLevel.INFO, f"Noise added successfully in {output_path}")
    return 0