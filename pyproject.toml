[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sygma_relay"
version = "0.1.0"
description = "Relayer building blocks: peer message types, session subscriptions, stream framing and substrate deposit/retry event handling"
requires-python = ">=3.10"
dependencies = []
keywords = ["relayer", "bridge", "substrate", "messaging", "subscriptions"]
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
    "Typing :: Typed",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sygma_relay"]

[tool.pytest.ini_options]
addopts = "-ra"
