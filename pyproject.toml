[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ddnskit"
version = "0.1.0"
description = "Building blocks for dynamic DNS clients: cloud API request signers, IP caching, DNS fallback, log messages and self-update helpers."
requires-python = ">=3.10"
keywords = [
    "ddns",
    "dynamic-dns",
    "dns",
    "aliyun",
    "huawei-cloud",
    "tencent-cloud",
    "baidu-cloud",
    "volcengine",
    "request-signing",
    "self-update",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: Internet",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: System :: Networking",
]
dependencies = [
    "bcrypt",
    "httpx",
    "dnspython",
]

[project.optional-dependencies]
test = [
    "pytest",
    "respx",
]

[tool.hatch.build.targets.wheel]
packages = ["ddnskit"]

[tool.hatch.build.targets.sdist]
include = [
    "ddnskit",
    "tests",
    "README.md",
    "pyproject.toml",
]

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
