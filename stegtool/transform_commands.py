"""The ``hide-fft``, ``show-fft``, ``hide-dct`` and ``show-dct`` subcommands."""

from __future__ import annotations

import re
import sys
from collections.abc import Sequence

from stegtool.cliargs import ArgumentError, ArgumentKind, ArgumentParser
from stegtool.dct import hide_dct, show_dct
from stegtool.fourier import hide_fft, show_fft
from stegtool.lsb import StegError
from stegtool.lsb_commands import PROGRAM_NAME, PROGRAM_VERSION
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

COMMAND_HIDE_FFT = "hide-fft"
COMMAND_SHOW_FFT = "show-fft"
COMMAND_HIDE_DCT = "hide-dct"
COMMAND_SHOW_DCT = "show-dct"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _argv(argv: Sequence[str] | None) -> list[str]:
    return list(sys.argv[1:] if argv is None else argv)


def _parse(parser: ArgumentParser, argv: Sequence[str]) -> bool:
    try:
        parser.parse(argv)
    except ArgumentError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        sys.stdout.write(parser.help_text())
        return False
    return True


def _add_image(parser: ArgumentParser) -> None:
    parser.add_argument(
        "i", "image", "Path to the image file", ArgumentKind.POSITIONAL, True
    )


def _add_compression(parser: ArgumentParser) -> None:
    parser.add_argument(
        "c", "compression", "Compression level (default: 1)", ArgumentKind.VALUE, False
    )


def _load(path: str, what: str) -> Image | None:
    try:
        return load_image(path)
    except OSError as exc:
        log(LogLevel.ERROR, f"Error loading {what}: {exc}")
        return None


def _save(path: str | None, image: Image) -> bool:
    if path is None:
        log(LogLevel.ERROR, "Error saving modified image: no output path given")
        return False
    try:
        save_png(path, image)
    except (OSError, ValueError) as exc:
        log(LogLevel.ERROR, f"Error saving modified image: {exc}")
        return False
    return True


def _report(message: bytes, output_path: str | None) -> int:
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


def hide_fft_command(argv: Sequence[str] | None = None) -> int:
    """Hide an image in the spectrum of another; ``argv[0]`` is the command name."""
    parser = ArgumentParser(
        f"{PROGRAM_NAME} {COMMAND_HIDE_FFT}",
        "Hide a message in an image using FFT",
        PROGRAM_VERSION,
    )
    _add_image(parser)
    parser.add_argument(
        "o", "output", "Path to save the modified image", ArgumentKind.VALUE, False
    )
    parser.add_argument(
        "p",
        "payload",
        "Path to the payload file (default: stdin)",
        ArgumentKind.VALUE,
        False,
    )
    if not _parse(parser, _argv(argv)):
        return 1

    image_path = parser.get_value("image")
    output_path = parser.get_value("output")
    payload_path = parser.get_value("payload")

    image = _load(image_path, "image")
    if image is None:
        return 1

    if payload_path is None:
        log(
            LogLevel.ERROR,
            "Reading payload from stdin is not implemented for FFT hiding",
        )
        return 1
    payload = _load(payload_path, "payload image")
    if payload is None:
        return 1

    try:
        pixels = hide_fft(
            image.pixels,
            image.width,
            image.height,
            image.channels,
            payload.pixels,
            payload.width,
            payload.height,
            payload.channels,
        )
    except StegError as exc:
        log(LogLevel.ERROR, f"Error hiding message in image: {exc}")
        return 1

    if not _save(output_path, Image(image.width, image.height, image.channels, pixels)):
        return 1

    log(LogLevel.INFO, f"Message hidden successfully in {output_path}")
    return 0


def show_fft_command(argv: Sequence[str] | None = None) -> int:
    """Recover an image hidden by ``hide-fft``; ``argv[0]`` is the command name."""
    parser = ArgumentParser(
        f"{PROGRAM_NAME} {COMMAND_SHOW_FFT}",
        "Show a hidden message in an image using FFT",
        PROGRAM_VERSION,
    )
    parser.add_argument(
        "g",
        "og-image",
        "Path to the original image file",
        ArgumentKind.POSITIONAL,
        True,
    )
    _add_image(parser)
    parser.add_argument(
        "o",
        "output",
        "Path to save the modified image (default: stdout)",
        ArgumentKind.VALUE,
        False,
    )
    if not _parse(parser, _argv(argv)):
        return 1

    original_path = parser.get_value("og-image")
    image_path = parser.get_value("image")
    output_path = parser.get_value("output")

    image = _load(image_path, "image")
    if image is None:
        return 1
    original = _load(original_path, "original image")
    if original is None:
        return 1
    if original.width != image.width or original.height != image.height:
        log(
            LogLevel.ERROR,
            "Original image dimensions do not match the modified image dimensions",
        )
        return 1

    try:
        message = show_fft(
            original.pixels, image.pixels, image.width, image.height, image.channels
        )
    except StegError as exc:
        log(LogLevel.ERROR, f"Error showing message from image: {exc}")
        return 1

    message_length = image.width * image.height
    if message_length > 0 and output_path is not None:
        recovered = Image(image.width, image.height, image.channels, message)
        if not _save(output_path, recovered):
            return 1
    else:
        print(describe_message(message[:message_length]))
    return 0


def hide_dct_command(argv: Sequence[str] | None = None) -> int:
    """Hide a payload in the DCT coefficients of an image; ``argv[0]`` is the command name."""
    parser = ArgumentParser(
        f"{PROGRAM_NAME} {COMMAND_HIDE_DCT}",
        "Hide a message in an image using DCT",
        PROGRAM_VERSION,
    )
    _add_image(parser)
    parser.add_argument(
        "o", "output", "Path to save the modified image", ArgumentKind.VALUE, False
    )
    parser.add_argument(
        "p",
        "payload",
        "Path to the payload file (default: stdin)",
        ArgumentKind.VALUE,
        False,
    )
    _add_compression(parser)
    if not _parse(parser, _argv(argv)):
        return 1

    image_path = parser.get_value("image")
    output_path = parser.get_value("output")
    payload_path = parser.get_value("payload")
    compression = _to_int(parser.get_value("compression", "1"))

    image = _load(image_path, "image")
    if image is None:
        return 1

    try:
        payload = read_payload(payload_path)
    except OSError as exc:
        log(LogLevel.ERROR, f"Error reading payload file: {exc}")
        return 1

    try:
        pixels = hide_dct(
            image.pixels,
            image.width,
            image.height,
            image.channels,
            payload,
            compression,
        )
    except StegError as exc:
        log(LogLevel.ERROR, f"Error hiding message in image: {exc}")
        return 1

    if not _save(output_path, Image(image.width, image.height, image.channels, pixels)):
        return 1

    log(LogLevel.INFO, f"Message hidden successfully in {output_path}")
    return 0


def show_dct_command(argv: Sequence[str] | None = None) -> int:
    """Recover a payload hidden by ``hide-dct``; ``argv[0]`` is the command name."""
    parser = ArgumentParser(
        f"{PROGRAM_NAME} {COMMAND_SHOW_DCT}",
        "Show a hidden message in an image using DCT",
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
    if not _parse(parser, _argv(argv)):
        return 1

    image_path = parser.get_value("image")
    output_path = parser.get_value("output")
    compression = _to_int(parser.get_value("compression", "1"))

    image = _load(image_path, "image")
    if image is None:
        return 1

    try:
        message = show_dct(
            image.pixels, image.width, image.height, image.channels, compression
        )
    except StegError as exc:
        log(LogLevel.ERROR, f"Error showing message from image: {exc}")
        return 1

    print(f"Message length: {len(message)}")
    return _report(message, output_path)