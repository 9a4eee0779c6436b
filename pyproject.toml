[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "surfacemap"
version = "0.1.0"
description = "Attack surface mapping data model: DNS and ASN request records, an ASN cache, and graph exporters for D3, DOT, GEXF, Graphistry and Maltego."
requires-python = ">=3.10"
dependencies = []
keywords = ["dns", "asn", "reconnaissance", "attack-surface", "graph", "visualization"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Information Technology",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: Internet :: Name Service (DNS)",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["surfacemap"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
