[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lightlight"
version = "0.1.0"
description = "Two-player reaction light game driving a HT16K33 LED and key matrix, with simulated peripherals"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "arcade", "ht16k33", "led", "reaction", "simulator"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lightlight = "lightlight.app:main"

[tool.hatch.build.targets.wheel]
packages = ["lightlight"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
