"""Image steganography with LSB, FFT and DCT embedding and Hamming error correction."""

__version__ = "0.1.0"