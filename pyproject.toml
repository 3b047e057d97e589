[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tradekit"
version = "0.1.0"
description = "Trading protocol decoders, a limit order book simulator and a market data tape checker"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "trading",
    "fix",
    "fast",
    "itch",
    "ouch",
    "pitch",
    "boe",
    "xdp",
    "taq",
    "soupbintcp",
    "order-book",
    "market-data",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tradekit-tape = "tradekit.tape:main"

[tool.hatch.build.targets.wheel]
packages = ["tradekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
