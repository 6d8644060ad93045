#!/usr/bin/env python3
"""
Setup script for the Node Usage Collectd package.
"""

from setuptools import setup, find_packages

# Read version from package metadata without importing dependencies
version = {}
with open("node_usage/__init__.py") as f:
    for line in f:
        if line.startswith("__") and "=" in line and not line.rstrip().endswith("("):
            key, _, value = line.partition("=")
            version[key.strip()] = value.strip().strip('"')

# Read requirements; everything after the development comment is a test extra
requirements = []
test_requirements = []
with open("requirements.txt") as f:
    target = requirements
    for line in f:
        line = line.strip()
        if not line:
            continue
        if line.startswith("#"):
            target = test_requirements
            continue
        target.append(line)

setup(
    name="node-usage-collectd",
    version=version["__version__"],
    author=version["__author__"],
    description="Collectd exec plugin reporting Internode usage, quota and projected target",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=requirements,
    extras_require={"test": test_requirements},
    python_requires=">=3.9",
    entry_points={
        "console_scripts": [
            "node-usage-collectd=node_usage.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Monitoring",
    ],
    keywords="collectd internode usage quota monitoring",
    project_urls={
        "Source": "https://github.com/damomurf/node-usage-collectd",
        "Bug Reports": "https://github.com/damomurf/node-usage-collectd/issues",
    },
)
