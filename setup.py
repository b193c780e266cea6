#!/usr/bin/env python
import os
import re

from setuptools import find_packages, setup

here = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(here, "src", "pixel_layers", "version.py")) as f:
    version = re.search(r"__version__ = \"([^\"]+)\"", f.read()).group(1)


setup(
    name="pixel-layers",
    version=version,
    description="Layered RGBA pixel compositing with named blend modes",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "numpy",
        "Pillow>=8.0",
        "attrs>=22.2.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "pixel-layers=pixel_layers.__main__:main",
        ],
    },
)
