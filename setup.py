#!/usr/bin/env python
import os

from setuptools import find_packages, setup


def get_version():
    about = {}
    with open(os.path.join("src", "collage_tools", "version.py")) as f:
        exec(f.read(), about)
    return about["__version__"]


setup(
    name="collage-tools",
    version=get_version(),
    description="Layered image compositor with blend filters and text file formats",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    license="MIT",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "attrs>=23.1.0",
        "numpy",
        "Pillow>=10.3.0",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-cov",
        ],
    },
    entry_points={
        "console_scripts": [
            "collage-tools=collage_tools.__main__:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Multimedia :: Graphics",
    ],
)
