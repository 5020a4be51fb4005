[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "refraction_bot"
version = "0.1.0"
description = "Building blocks for a launcher community chat bot: log analysis, tags, welcome layouts, API helpers and a Redis cache"
requires-python = ">=3.10"
keywords = ["chat", "bot", "discord", "minecraft", "log-analysis", "support"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Typing :: Typed",
    "Topic :: Communications :: Chat",
]
dependencies = [
    "httpx>=0.24",
    "redis>=4.5",
    "pyyaml>=6.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "pytest-asyncio>=0.21",
    "respx>=0.20",
]

[tool.hatch.build.targets.wheel]
packages = ["refraction_bot"]

[tool.hatch.build.targets.sdist]
include = ["refraction_bot", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
