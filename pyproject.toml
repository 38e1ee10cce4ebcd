[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ukmedia"
version = "0.1.0"
description = "Single-instance application support, custom sound bookkeeping, mute-LED control and volume-control arithmetic for a desktop volume applet"
requires-python = ">=3.10"
dependencies = []
keywords = ["volume", "audio", "mixer", "single-instance", "mute", "led", "file-lock"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Mixers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ukmedia-control-led = "ukmedia.control_led:main"

[tool.hatch.build.targets.wheel]
packages = ["ukmedia"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
