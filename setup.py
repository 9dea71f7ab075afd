#!/usr/bin/env python3

from setuptools import setup, find_packages

setup(
    name="llvmdep",
    version="0.1.0",
    description="Resolve LLVM backend targets, link libraries and language flags for dependent builds",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "json5",
        "PyYAML",
    ],
    extras_require={
        "dev": ["pytest", "black", "mypy"],
    },
    entry_points={
        "console_scripts": [
            "llvmdep=llvmdep.cli:main",
        ],
    },
)
