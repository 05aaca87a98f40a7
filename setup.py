"""
npuzzle: the generalized N-puzzle

Packaging configuration for the npuzzle library.
"""

import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="npuzzle",
    version="0.1.0",
    description="Generalized N-puzzle (sliding tile) board model with parity-based solvability",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(include=["npuzzle", "npuzzle.*"]),
    include_package_data=True,
    install_requires=[
        "jax>=0.4.0",
        "chex>=0.1.0",
        "numpy>=2.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
        ],
        "scripts": [
            "click>=8.0.0",
            "tabulate>=0.9.0",
            "termcolor>=2.1.0",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Games/Entertainment :: Puzzle Games",
    ],
    python_requires=">=3.9",
)
