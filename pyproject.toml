[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "udpsum"
version = "0.1.0"
description = "A UDP aggregation service: clients discover a server by broadcast and send numbers that it sums reliably."
requires-python = ">=3.10"
dependencies = []
keywords = ["udp", "broadcast", "discovery", "aggregation", "networking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
udpsum-server = "udpsum.server:main"
udpsum-client = "udpsum.client:main"
udpsum-randgen = "udpsum.randgen:main"

[tool.setuptools.packages.find]
include = ["udpsum*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
