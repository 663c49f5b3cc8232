[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sysbits"
version = "0.1.0"
description = "Small UNIX system utilities: string helpers, /etc and /proc parsers, a directory tree printer, linked lists and queues, a static allocator, timers and a UNIX socket daemon"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "unix",
    "posix",
    "proc",
    "urlencode",
    "tree",
    "linked-list",
    "queue",
    "allocator",
    "timers",
    "unix-socket",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
    "Topic :: System",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sysbits-urlencode = "sysbits.strings:main"
sysbits-protoserv = "sysbits.lfile:main"
sysbits-procparent = "sysbits.procinfo:main"
sysbits-name = "sysbits.names:main"
sysbits-tree = "sysbits.tree:main"
sysbits-tailq-demo = "sysbits.tailq_demo:main"
sysbits-timers = "sysbits.timers:main"
sysbits-softtimer = "sysbits.softtimer:main"
sysbits-spinner = "sysbits.spinner:main"
sysbits-daemon = "sysbits.daemon:main"
sysbits-client = "sysbits.client:main"

[tool.hatch.build.targets.wheel]
packages = ["sysbits"]

[tool.pytest.ini_options]
addopts = "-ra"
