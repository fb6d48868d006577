[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "syslab"
version = "0.1.0"
description = "Small systems-programming exercises: a stack machine, a memory manager, a tiny shell, a system greeting, a park ride simulation and the on-disk structures of a tiny file system"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "education",
    "operating-systems",
    "stack-machine",
    "memory-manager",
    "shell",
    "simulation",
    "file-system",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
syslab-stackm = "syslab.stackm:main"
syslab-memory = "syslab.memory:main"
syslab-shell = "syslab.shell:main"
syslab-hello = "syslab.hello:main"
syslab-park = "syslab.park_display:main"

[tool.hatch.build.targets.wheel]
packages = ["syslab"]

[tool.pytest.ini_options]
addopts = "-ra"
