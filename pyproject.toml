[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fuego"
version = "0.1.0"
description = "Request context, body deserialization, HTTP errors and entity scaffolding for web APIs"
requires-python = ">=3.10"
keywords = ["http", "api", "web", "deserialization", "scaffolding", "problem-details"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Typing :: Typed",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
fuego = "fuego.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["fuego"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
