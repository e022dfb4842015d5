[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netpixeld"
version = "0.1.0"
description = "A small networked pixel game: a TCP server that assigns client ids and a pygame client"
requires-python = ">=3.10"
keywords = ["game", "networking", "tcp", "multiplayer", "pygame"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: System :: Networking",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
net-pixeld-server = "netpixeld.server:main"
net-pixeld-client = "netpixeld.app:main"

[tool.hatch.build.targets.wheel]
packages = ["netpixeld"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
