#!/usr/bin/python3

import setuptools

setuptools.setup(
    name="hhnet",
    version="0.1.0",
    license="MIT",
    description="Hodgkin-Huxley neurons and small synaptically coupled networks.",
    long_description=open("README.md", "rt").read(),
    long_description_content_type="text/markdown",
    install_requires=[
            "numba",
            "numpy",
            "scipy",
    ],
    extras_require={
            "tests": ["pytest"],
    },
    packages=setuptools.find_packages(include=["hhnet", "hhnet.*"]),
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],
    python_requires='>=3.8',
)
