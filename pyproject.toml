[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "studentrecords"
version = "1.0.0"
description = "A small student information manager with a plain-text data file and a Tk desktop window"
requires-python = ">=3.10"
dependencies = []
keywords = ["students", "records", "registry", "credits", "tkinter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: Education",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = ["pytest"]

[project.gui-scripts]
studentrecords = "studentrecords.gui:main"

[tool.hatch.build.targets.wheel]
packages = ["studentrecords"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
