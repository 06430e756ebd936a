[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "konf"
version = "0.1.0"
description = "Lightweight kubeconfig manager that gives every shell session its own kubeconfig"
requires-python = ">=3.10"
keywords = ["kubernetes", "kubeconfig", "kubectl", "context", "namespace", "shell"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Operating System :: MacOS",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]
dependencies = [
    "pyyaml>=6.0",
    "psutil>=5.9",
    "httpx>=0.24",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
konf-go = "konf.root:main"

[tool.hatch.build.targets.wheel]
packages = ["konf"]

[tool.hatch.build.targets.sdist]
include = ["konf", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
