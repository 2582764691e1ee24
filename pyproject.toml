[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "walletcli"
version = "0.1.0"
description = "A small command-line wallet: deposits, withdrawals, transfers and transaction history backed by SQLite."
requires-python = ">=3.10"
dependencies = []
keywords = ["wallet", "balance", "transfer", "ledger", "cli", "sqlite"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Accounting",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
walletcli = "walletcli.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["walletcli"]

[tool.pytest.ini_options]
addopts = "-ra"
