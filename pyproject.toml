[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "evrhash"
version = "0.5.1a1"
description = "Ethash proof-of-work primitives: Keccak, epoch contexts, dataset generation, hashing and verification"
requires-python = ">=3.10"
dependencies = [
    "pycryptodome",
]
keywords = ["ethash", "keccak", "proof-of-work", "hash", "mining"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["evrhash"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
