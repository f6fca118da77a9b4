[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "liso"
version = "0.1.0"
description = "A small HTTP/1.1 server for static sites, with a request parser, access and error logs, and a test client"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "static", "parser", "select"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
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
liso-server = "liso.server:main"
liso-client = "liso.client:main"
liso-example = "liso.example:main"

[tool.hatch.build.targets.wheel]
packages = ["liso"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
