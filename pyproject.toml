[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sshpick"
version = "0.2.0"
description = "Interactive fuzzy selector for hosts in your SSH config"
requires-python = ">=3.10"
dependencies = []
keywords = ["ssh", "cli", "terminal", "selector", "fuzzy"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Operating System :: Microsoft :: Windows",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sshpick = "sshpick.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sshpick"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
