import io
import sys

import pytest

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


def test_log_info_prefix_and_location(capsys):
    log(LogLevel.INFO, "Message hidden successfully in out.png")
    err = capsys.readouterr().err
    assert err.startswith("\033[1;34mINFO\033[0m: test_support.py:")
    assert err.endswith(": Message hidden successfully in out.png\n")


def test_log_error_uses_red(capsys):
    log(LogLevel.ERROR, "boom")
    err = capsys.readouterr().err
    assert err.startswith("\033[1;31mERROR\033[0m: ")


def test_log_warning_uses_yellow(capsys):
    log(LogLevel.WARNING, "careful")
    assert capsys.readouterr().err.startswith("\033[1;33mWARNING\033[0m: ")


def test_log_no_logs_is_silent(capsys):
    log(LogLevel.NO_LOGS, "hidden")
    assert capsys.readouterr().err == ""


def test_read_payload_from_file(tmp_path):
    path = tmp_path / "payload.bin"
    data = bytes(range(256)) * 10
    path.write_bytes(data)
    assert read_payload(path) == data


def test_read_payload_from_stdin(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"from stdin\x00\xff")))
    assert read_payload(None) == b"from stdin\x00\xff"


def test_read_payload_missing_file(tmp_path):
    with pytest.raises(OSError, match="Failed to open file .* for reading"):
        read_payload(tmp_path / "missing.bin")


def test_write_output_round_trip(tmp_path):
    path = tmp_path / "out.bin"
    write_output(path, b"\x00secret bytes\xff")
    assert read_payload(path) == b"\x00secret bytes\xff"


def test_write_output_to_stdout(monkeypatch):
    buffer = io.BytesIO()
    monkeypatch.setattr(sys, "stdout", io.TextIOWrapper(buffer))
    write_output(None, b"abc\x01")
    assert buffer.getvalue() == b"abc\x01"


def test_write_output_bad_directory(tmp_path):
    with pytest.raises(OSError, match="Failed to open file .* for writing"):
        write_output(tmp_path / "no" / "such" / "dir.bin", b"x")


@pytest.mark.parametrize("channels", [1, 2, 3, 4])
def test_png_round_trip(tmp_path, channels):
    width, height = 5, 3
    pixels = bytes((i * 37) % 256 for i in range(width * height * channels))
    image = Image(width, height, channels, pixels)
    path = tmp_path / "image.png"
    save_png(path, image)
    loaded = load_image(path)
    assert loaded == image


def test_png_signature(tmp_path):
    path = tmp_path / "sig.png"
    save_png(path, Image(2, 2, 3, bytes(12)))
    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_image_rejects_wrong_size():
    with pytest.raises(ValueError):
        Image(2, 2, 3, bytes(11))


def test_image_rejects_bad_channels():
    with pytest.raises(ValueError):
        Image(1, 1, 5, bytes(5))


def test_load_image_missing(tmp_path):
    with pytest.raises(OSError):
        load_image(tmp_path / "missing.png")


def test_load_image_not_an_image(tmp_path):
    path = tmp_path / "text.png"
    path.write_bytes(b"not an image at all")
    with pytest.raises(OSError):
        load_image(path)


def test_describe_empty_message():
    assert describe_message(b"") == "No hidden message found in the image."


def test_describe_short_message():
    assert describe_message(b"hello") == "Hidden message: hello"


def test_describe_short_message_stops_at_nul():
    assert describe_message(b"hi\x00there") == "Hidden message: hi"


def test_describe_long_message():
    message = b"\xab" * 40
    assert describe_message(message) == (
        "Hidden message (first 32 bytes): " + "ab" * 32 + "... (40 bytes total)"
    )


def test_describe_exactly_32_bytes_is_text():
    message = b"x" * 32
    assert describe_message(message) == "Hidden message: " + "x" * 32