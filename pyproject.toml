[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "palsuite"
version = "0.1.0"
description = "Command-line tools and a library for classic cipher exercises: hex and base64 encoding, XOR ciphers and their cracking, and AES-128 in ECB and CBC modes."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "cryptography",
    "xor",
    "aes",
    "ecb",
    "cbc",
    "base64",
    "hex",
    "cryptanalysis",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
atob64 = "palsuite.encoding:atob64_main"
atoh = "palsuite.encoding:atoh_main"
htoa = "palsuite.encoding:htoa_main"
fxor = "palsuite.xor:fxor_main"
sxor = "palsuite.xor:sxor_main"
rxor = "palsuite.xor:rxor_main"
sxor-crack = "palsuite.crack:sxor_crack_main"
rxor-crack = "palsuite.crack:rxor_crack_main"
aes128-ecb = "palsuite.ecb:aes128_ecb_main"
detect-aes128-ecb = "palsuite.ecb:detect_main"

[tool.hatch.build.targets.wheel]
packages = ["palsuite"]

[tool.hatch.build.targets.sdist]
include = ["palsuite", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
files = ["palsuite"]
