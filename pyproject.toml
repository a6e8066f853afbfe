[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "umkatools"
version = "0.1.0"
description = "Raw and qcow2 virtual disks, framebuffer and devices.dat helpers, coverage annotation and file-system test data generators"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "qcow2",
    "raw disk image",
    "virtual disk",
    "coverage",
    "xfs",
    "test data",
    "file system testing",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
covpreproc = "umkatools.covpreproc:main"
gensamehash = "umkatools.samehash:main"
mkdirrange = "umkatools.mkdirs:main_dirrange"
mkdoubledirs = "umkatools.mkdirs:main_doubledirs"
mkfilepattern = "umkatools.filepattern:main"
randdir = "umkatools.randdir:main"
mksamehash = "umkatools.mksamehash:main"

[tool.hatch.build.targets.wheel]
packages = ["umkatools"]

[tool.pytest.ini_options]
addopts = "-ra"
