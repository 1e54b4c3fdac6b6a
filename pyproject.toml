[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chatkit"
version = "0.1.0"
description = "Building blocks for a chat service backend: tokens, caller checks, request validation, verification mail, spreadsheet import and IM API calls"
requires-python = ">=3.10"
keywords = ["chat", "im", "jwt", "validation", "xlsx", "verification", "wsgi"]
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
    "Topic :: Communications :: Chat",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Middleware",
]
dependencies = [
    "pyjwt",
    "httpx",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["chatkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
