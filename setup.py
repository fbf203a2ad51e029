# -*- coding: utf-8 -*-

from setuptools import find_packages, setup

extras_require = {
    "test": [
        "pytest>=6.2.5,<9.0",
        "pytest-cov>=2.10,<6.0",
        "pytest-instafail>=0.4,<1.0",
        "pytest-xdist>=2.5,<4.0",
        "hypothesis>=6.0,<7.0",
    ],
    "lint": [
        "black==23.12.0",
        "flake8==6.1.0",
        "flake8-bugbear==23.12.2",
        "flake8-use-fstring==1.4",
        "isort==5.13.2",
        "mypy==1.5",
    ],
    "dev": ["ipython", "pre-commit", "twine"],
}

extras_require["dev"] = extras_require["test"] + extras_require["lint"] + extras_require["dev"]

with open("README.md", "r") as f:
    long_description = f.read()

version = {}
with open("fuzzstd/version.py", "r") as f:
    exec(f.read(), version)


setup(
    name="fuzzstd",
    version=version["version"],
    description="fuzzstd: cheats, bounds and assertions for fuzzing EVM state machines",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="fuzzstd contributors",
    author_email="",
    license="Apache License 2.0",
    keywords="ethereum evm fuzzing property-based testing",
    include_package_data=True,
    packages=find_packages(include=["fuzzstd", "fuzzstd.*"]),
    python_requires=">=3.10,<4",
    install_requires=[
        "pycryptodome>=3.5.1,<4",
        "py-evm>=0.10.0b1,<0.11",
        "eth-keys>=0.4.0,<1",
        "eth-utils>=2.0.0,<6",
        "eth-typing>=3.0.0,<6",
        "eth-abi>=4.0.0,<6",
        "rlp>=3.0.0,<5",
        "cached-property>=1.5.2,<3",
    ],
    tests_require=extras_require["test"],
    extras_require=extras_require,
    entry_points={"console_scripts": ["fuzzstd=fuzzstd.cli.fuzzstd_cli:_parse_cli_args"]},
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
