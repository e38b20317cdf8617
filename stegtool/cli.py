"""Entry point dispatching to the subcommands."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence

from stegtool.lsb_commands import (
    COMMAND_HIDE_LSB,
    COMMAND_NOISE_LSB,
    COMMAND_SHOW_LSB,
    PROGRAM_NAME,
    PROGRAM_VERSION,
    hide_lsb_command,
    noise_lsb_command,
    show_lsb_command,
)
from stegtool.transform_commands import (
    COMMAND_HIDE_DCT,
    COMMAND_HIDE_FFT,
    COMMAND_SHOW_DCT,
    COMMAND_SHOW_FFT,
    hide_dct_command,
    hide_fft_command,
    show_dct_command,
    show_fft_command,
)

COMMAND_VERSION = "version"
COMMAND_HELP = "help"

_COMMANDS: dict[str, Callable[[Sequence[str]], int]] = {
    COMMAND_HIDE_LSB: hide_lsb_command,
    COMMAND_SHOW_LSB: show_lsb_command,
    COMMAND_HIDE_FFT: hide_fft_command,
    COMMAND_SHOW_FFT: show_fft_command,
    COMMAND_HIDE_DCT: hide_dct_command,
    COMMAND_SHOW_DCT: show_dct_command,
    COMMAND_NOISE_LSB: noise_lsb_command,
}


def usage_text() -> str:
    """Return the top-level usage message."""
    lines = [
        f"usage: {PROGRAM_NAME} <SUBCOMMAND> [OPTIONS]",
        f"    {COMMAND_HIDE_LSB} - Hide a message in an image using LSB",
        f"    {COMMAND_SHOW_LSB} - Show a hidden message in an image using LSB",
        f"    {COMMAND_HIDE_FFT} - Hide a message in an image using FFT",
        f"    {COMMAND_SHOW_FFT} - Show a hidden message in an image using FFT",
        f"    {COMMAND_NOISE_LSB} - Add noise in the LSB of the image",
        f"    {COMMAND_VERSION} - Show the version of the program",
        f"    {COMMAND_HELP} - Show this help message",
        "",
        "You can use --help for more information on each command.",
        "",
    ]
    return "\n".join(lines) + "\n"


def main(argv: Sequence[str] | None = None) -> int:
    """Run the subcommand named by ``argv[0]``; ``argv`` excludes the program name."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        sys.stdout.write(usage_text())
        return 1

    command = args[0]
    if command == COMMAND_HELP:
        sys.stdout.write(usage_text())
        return 0
    if command == COMMAND_VERSION:
        sys.stdout.write(f"{PROGRAM_NAME} {PROGRAM_VERSION}\n")
        return 0

    handler = _COMMANDS.get(command)
    if handler is None:
        sys.stderr.write(f"Unknown command: {command}\n")
        sys.stdout.write(usage_text())
        return 1
    return handler(args)


if __name__ == "__main__":
    raise SystemExit(main())