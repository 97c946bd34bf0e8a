[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rocketrpc"
version = "0.1.0"
description = "Building blocks for a small RPC framework: the TinyPB frame format, a service dispatcher, timers, byte buffers and buffered file logging."
requires-python = ">=3.10"
dependencies = []
keywords = ["rpc", "tinypb", "dispatcher", "timer", "tcp", "logging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rocketrpc"]

[tool.pytest.ini_options]
addopts = "-ra"
