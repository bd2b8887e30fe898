[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bridgeapi"
version = "0.1.0"
description = "Dependency-free HTTP API for monitoring a cross-chain token bridge: health, statistics, validators, tokens, blocks, events and metrics"
requires-python = ">=3.10"
dependencies = []
keywords = ["bridge", "cross-chain", "http", "api", "monitoring", "validators", "metrics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bridgeapi-demo = "bridgeapi.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["bridgeapi"]

[tool.pytest.ini_options]
addopts = "-ra"
