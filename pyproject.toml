[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "otelcol-operator"
version = "0.1.0"
description = "Collector custom resource model, defaulting, validation, labels, annotations and receiver port inference for an OpenTelemetry Collector operator"
requires-python = ">=3.10"
keywords = ["opentelemetry", "collector", "kubernetes", "operator", "receivers", "ports"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["otelcol_operator"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
