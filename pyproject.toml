[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bigos"
version = "0.1.0"
description = "Kernel building blocks: flattened device tree parsing, length-checked strings, trap decoding and a virtual file system mount tree"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "kernel",
    "operating-system",
    "device-tree",
    "fdt",
    "vfs",
    "risc-v",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System Kernels",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bigos-dtree = "bigos.dtree_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["bigos"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
