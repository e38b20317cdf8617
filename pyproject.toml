[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stegtool"
version = "0.1.0"
description = "Hide and recover data in images using LSB, FFT and DCT steganography"
requires-python = ">=3.10"
keywords = ["steganography", "lsb", "fft", "dct", "hamming", "image"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
steg = "stegtool.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["stegtool"]

[tool.pytest.ini_options]
addopts = "-ra"
