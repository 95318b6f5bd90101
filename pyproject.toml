[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coletarun"
version = "0.1.0"
description = "Two-player local arcade game about collecting trash bags and sorting them into the right bins"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "arcade", "two-player", "recycling", "procedural", "bsp", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
coletarun = "coletarun.app:main"

[tool.hatch.build.targets.wheel]
packages = ["coletarun"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
