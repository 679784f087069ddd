#!/usr/bin/env python3
"""
Setup script for the driller-controller package.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="driller-controller",
    version="0.1.0",
    description="A Python controller that steps a mirrored pair of drill rotors by caliber increments",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: System :: Hardware",
        "Development Status :: 4 - Beta",
    ],
    python_requires=">=3.8",
    install_requires=[
        "pyserial>=3.5",
        "loguru>=0.6",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        'console_scripts': [
            'driller-controller=driller_controller.cli:main',
        ],
    },
    keywords="rotor, drill, stepper, controller, state machine, hardware",
)
