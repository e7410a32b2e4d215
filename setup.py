#!/usr/bin/env python3
"""
Setup script for bucket-cache.
"""

import codecs
import os
import re
from setuptools import setup, find_packages


def read(rel_path):
    """Read file content."""
    here = os.path.abspath(os.path.dirname(__file__))
    with codecs.open(os.path.join(here, rel_path), 'r', 'utf-8') as fp:
        return fp.read()


def find_version(rel_path):
    """Extract version from __version__.py file."""
    version_content = read(rel_path)
    version_match = re.search(
        r'^__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
        version_content,
        re.MULTILINE
    )
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")


if __name__ == "__main__":
    setup(
        name="bucket-cache",
        version=find_version("bucket_cache/__version__.py"),
        description="Save and restore CI caches in object storage with negotiated tar compression",
        packages=find_packages(exclude=["tests*", "docs*", "examples*", "scripts*"]),
        python_requires=">=3.8",
        install_requires=[
            "click>=8.0",
            "rich>=12.0",
            "PyYAML>=5.4",
            "packaging>=21.0",
            "aiofiles>=0.8",
            "boto3>=1.26",
            "bce-python-sdk>=0.8",
        ],
        extras_require={
            "test": [
                "pytest>=7.0",
                "moto[s3]>=5.0",
            ],
        },
        entry_points={
            "console_scripts": [
                "bucket-cache=bucket_cache.cli.main:main",
            ],
        },
    )
