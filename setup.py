#!/usr/bin/env python3

from setuptools import setup, find_packages
import os

directory = os.path.dirname(os.path.realpath(__file__))


if __name__ == "__main__":
    setup(
        name="mousefx",
        packages=find_packages(include=["mousefx", "mousefx.*"]),
        python_requires='>3.10.0',
        version="0.1.0",
        license="MIT",
        description="Mouse cursor to plane point adapter for particle effects",
        long_description=open(os.path.join(
            directory, "README.md"), "r", encoding="utf8").read(),
        long_description_content_type="text/markdown",
        keywords=["vfx", "raycast", "input"],
        classifiers=[],
        install_requires=[
            "numpy",
            "scipy",
            "glfw>=2.5.0",
        ],
        extras_require={
            "test": ["pytest"],
        },
        zip_safe=False,
    )
