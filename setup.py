"""
Setup script for modring.

To install:
    pip install .

To install in development mode:
    pip install -e ".[dev]"

To run tests:
    pytest modring/tests
"""

import os

from setuptools import setup, find_packages

setup(
    name="modring",
    version="0.1.0",
    description="Modular integer rings Z/QZ with overflow-safe fixed-width "
                "arithmetic, and vectors/matrices over finite-rank rings",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Topic :: Security :: Cryptography",
    ],
    keywords="modular-arithmetic finite-ring lattice rlwe mlwe",
)
