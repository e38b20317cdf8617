# stegtool

Hide data inside images and get it back out again. Three techniques are
available:

- **LSB**: payload bits are written into the least significant bits of each
  pixel byte. One, two, four or eight bits per byte can be used (the
  "compression" level). Optional Hamming(7,4) error correction lets the
  payload survive one flipped bit in each code byte.
- **FFT**: the first channel of a small image is added into the frequency
  domain of a cover image whose sides are powers of two. Recovering it needs
  the original cover image.
- **DCT**: payload bits are written into the parity of a coefficient of each
  8×8 block of the cover image.

Images are read with Pillow, keeping their own number of channels (grey,
grey with alpha, RGB or RGBA), and are always written out as PNG.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

The `steg` command takes a subcommand:

```
steg <SUBCOMMAND> [OPTIONS]
```

| Subcommand  | Does                                        |
|-------------|---------------------------------------------|
| `hide-lsb`  | Hide a message in an image using LSB        |
| `show-lsb`  | Show a hidden message in an image using LSB |
| `hide-fft`  | Hide an image in an image using FFT         |
| `show-fft`  | Show an image hidden using FFT              |
| `hide-dct`  | Hide a message in an image using DCT        |
| `show-dct`  | Show a hidden message in an image using DCT |
| `noise-lsb` | Add noise in the LSB of the image           |
| `version`   | Show the version of the program             |
| `help`      | Show the usage message                      |

Every subcommand accepts `-h`/`--help` for its own options and
`-v`/`--version`. Commands return 0 on success and 1 on failure, with the
reason logged to standard error.

### LSB

Hide the contents of `secret.txt` in `cover.png`, two bits per byte, with
error correction:

```
steg hide-lsb cover.png -o stego.png -p secret.txt -c 2 -e
```

`-o` is required. Without `-p` the payload is read from standard input. The
payload is stored behind an 8-byte little-endian length, and with `-e` the
whole is Hamming-encoded, doubling its size. It must fit in
`pixel bytes / (8 / compression)` bytes.

Read it back, with the same `-c` and `-e`:

```
steg show-lsb stego.png -c 2 -e -o recovered.txt
```

Without `-o` the message is printed: up to 32 bytes as text (up to the first
NUL byte), a longer one as the hex of its first 32 bytes and its total
length.

Simulate transmission noise to check the error correction:

```
steg noise-lsb stego.png -o noisy.png -c 2
```

In each window of `8 / compression` bytes, with probability one half, one of
the `compression` lowest bits of one byte is flipped.

### FFT

```
steg hide-fft cover.png -p logo.png -o stego.png
steg show-fft cover.png stego.png -o extracted.png
```

The cover must have power-of-two sides; the payload image must be at most
`width / 2 - 2` pixels wide and `height / 2 - 2` high, and have no more
channels than the cover. `show-fft` takes the original cover first and the
modified image second; with `-o` it writes the recovered spectrum difference
as a PNG the size of the cover, otherwise it prints a hex preview.

### DCT

```
steg hide-dct cover.png -p secret.txt -o stego.png
steg show-dct stego.png -o recovered.txt
```

Cover dimensions must be multiples of 8. The default compression is 1 (one
bit per block). `show-dct` prints the recovered length before the message.

## Library use

The embedding routines are plain functions over bytes:

```python
from stegtool.lsb import hide_lsb, show_lsb
from stegtool.hamming import hamming_encode, hamming_decode

cover = bytearray(1024)
payload = hamming_encode(b"hello")
stego = hide_lsb(cover, payload, 2)          # returns a new bytearray
assert hamming_decode(show_lsb(stego, len(payload), 2)) == b"hello"
```

- `stegtool.lsb`: `hide_lsb`, `show_lsb`, `validate_compression`, and
  `StegError`, which every embedder raises on failure.
- `stegtool.hamming`: `hamming_encode`, `hamming_decode`.
- `stegtool.fourier`: `hide_fft`, `show_fft`, `centralize`.
- `stegtool.dct`: `hide_dct`, `show_dct`.
- `stegtool.dsp`: `fft_simple`, `ifft_simple`, `fft_dit`, `ifft_dit`,
  `fft2d`, `ifft2d`, `dct2d`, `idct2d`.
- `stegtool.support`: `Image`, `load_image`, `save_png`, `read_payload`,
  `write_output`, `describe_message`, `log`, `LogLevel`.
- `stegtool.cliargs`: the small `ArgumentParser` the commands are built on,
  raising `ArgumentError`.

## Limitations

- `hide-fft` cannot read its payload from standard input; `-p` must name an
  image file.
- `hide-fft` and `hide-dct` accept no `-o` default: without it they fail
  instead of writing the image anywhere.
- Images are only ever written as PNG.