[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "seedycrypt"
version = "0.1.0"
description = "Thread-race entropy seeders, seeded pseudo-random generators and a small AES/ChaCha20 cipher toolkit"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = [
    "entropy",
    "random",
    "seeder",
    "mersenne-twister",
    "aes",
    "chacha20",
    "cipher",
    "block-cipher-modes",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["seedycrypt"]

[tool.hatch.build.targets.sdist]
include = [
    "seedycrypt",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
