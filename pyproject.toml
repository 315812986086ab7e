[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "disyn"
version = "0.1.0"
description = "Distortion synthesis voice: oscillator algorithms, envelope, reverb and control logic"
requires-python = ">=3.10"
dependencies = []
keywords = ["synthesis", "audio", "dsp", "oscillator", "distortion-synthesis", "reverb"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["disyn"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
