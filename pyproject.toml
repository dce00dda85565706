[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "systool"
version = "1.0.1"
description = "DNS and TLS analysis library: queries, propagation and consistency checks, bulk runs, DNSSEC and certificate inspection"
requires-python = ">=3.10"
keywords = ["dns", "propagation", "dnssec", "ssl", "tls", "certificate", "spf", "dmarc", "dkim", "sysadmin"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Information Technology",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: Security",
    "Topic :: System :: Networking",
    "Topic :: System :: Systems Administration",
    "Typing :: Typed",
]
dependencies = [
    "dnspython>=2.4",
    "cryptography>=42",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[tool.hatch.build.targets.wheel]
packages = ["systool"]

[tool.hatch.build.targets.sdist]
include = ["systool", "tests", "README.md", "pyproject.toml"]

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
warn_unused_ignores = true
warn_redundant_casts = true
