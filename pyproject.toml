[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pingpong"
version = "0.1.3"
description = "A terminal UI ping utility for monitoring network connectivity"
requires-python = ">=3.11"
keywords = ["ping", "icmp", "network", "monitoring", "tui", "terminal"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]
dependencies = [
    "tomli-w>=1.0",
    "blessed>=1.20",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "pytest-asyncio>=0.21",
]

[project.scripts]
pingpong = "pingpong.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pingpong"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"
