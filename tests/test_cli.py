import pytest

from stegtool.cli import main, usage_text
from stegtool.support import Image, save_png


def test_no_arguments_prints_usage(capsys):
    assert main([]) == 1
    assert capsys.readouterr().out == usage_text()


def test_help_command(capsys):
    assert main(["help"]) == 0
    assert capsys.readouterr().out == usage_text()


def test_usage_lists_commands():
    text = usage_text()
    assert text.startswith("usage: steg <SUBCOMMAND> [OPTIONS]\n")
    assert "    hide-lsb - Hide a message in an image using LSB\n" in text
    assert "    noise-lsb - Add noise in the LSB of the image\n" in text
    assert "You can use --help for more information on each command." in text


def test_version_command(capsys):
    assert main(["version"]) == 0
    assert capsys.readouterr().out == "steg v0.1.0\n"


def test_unknown_command(capsys):
    assert main(["bogus"]) == 1
    captured = capsys.readouterr()
    assert "Unknown command: bogus" in captured.err
    assert captured.out == usage_text()


def test_subcommand_version_flag(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["show-dct", "--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out == "steg show-dct v0.1.0\n"


def test_lsb_round_trip_through_main(tmp_path):
    cover = str(tmp_path / "cover.png")
    save_png(cover, Image(8, 8, 3, bytes(range(192))))
    payload = tmp_path / "payload.txt"
    payload.write_bytes(b"hello")
    out = str(tmp_path / "out.png")
    result = tmp_path / "result.txt"

    assert main(["hide-lsb", cover, "-p", str(payload), "-o", out]) == 0
    assert main(["show-lsb", out, "-o", str(result)]) == 0
    assert result.read_bytes() == b"hello"


def test_dispatch_reports_subcommand_errors(tmp_path, capsys):
    assert main(["show-fft", str(tmp_path / "a.png"), str(tmp_path / "b.png")]) == 1
    assert "Error loading image" in capsys.readouterr().err