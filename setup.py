# -*- coding: utf-8 -*-

# system imports
from setuptools import setup, find_packages  # type: ignore


# proceed with actual install
install_requires = [
    "click>=8.0.0",
    "keyring>=22",
    "packaging",
    "PyMySQL>=1.1.0",
    "rich>=12.0.0",
]

dev_requires = [
    "black",
    "flake8",
    "mypy",
    "pytest",
    "pytest-cov",
    "types-PyMySQL",
]

setup(
    name="dbconnector",
    author="Gonzalo Chumillas",
    version="1.0.0",
    description="Minimal MySQL connector with client side placeholder substitution.",
    license="BSD-2-Clause",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages("src"),
    package_dir={"": "src"},
    package_data={
        "dbconnector": ["py.typed"],
    },
    install_requires=install_requires,
    extras_require={
        "dev": dev_requires,
        "test": ["pytest", "pytest-cov"],
    },
    zip_safe=False,
    entry_points={
        "console_scripts": ["dbconnector=dbconnector.cli:main"],
    },
    python_requires=">=3.9",
    classifiers=[
        "License :: OSI Approved :: BSD License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Database",
    ],
)
