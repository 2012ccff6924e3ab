#!/usr/bin/env python3

from setuptools import setup, find_packages

setup(
    name="mediasweep",
    version="1.0.0",
    description="Find and clean up duplicate videos and images",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pixelmatch>=0.3.0",
        "Pillow>=8.0.0",
        "tqdm>=4.50.0",
        "colorama>=0.4.6",
    ],
    extras_require={
        'test': [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'imagededup=mediasweep.imagededup_main:main',
            'videodedup=mediasweep.videodedup_main:main',
        ],
    },
    python_requires='>=3.8',
)
