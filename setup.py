#!/usr/bin/env python

import sys
from setuptools import setup, find_packages
import subprocess
import re


def git_version():
    try:
        git_describe = (
            subprocess.check_output(
                ["git", "describe", "--long", "--tags", "--match", "[0-9]*"],
                stderr=subprocess.DEVNULL,
            )
            .strip()
            .decode()
        )
    except (OSError, subprocess.CalledProcessError):
        version = "0.1.0"
        return version

    describe_match = re.match(
        r"(?P<version>[0-9.]+)(-(?P<post_revision>\d+)-g(?P<commit>\w+))?", git_describe
    )
    if not describe_match:
        raise ValueError("Invalid version.", git_describe)
    else:
        desc = describe_match.groupdict()

    desc["post_revision"] = int(desc.get("post_revision", 0))
    if not desc["post_revision"]:
        version = f"{desc['version']}+{desc['commit']}"
    else:
        version = f"{desc['version']}.post.dev+{desc['post_revision']}.{desc['commit']}"

    return version


needs_pytest = {"pytest", "test"}.intersection(sys.argv)
pytest_runner = ["pytest-runner"] if needs_pytest else []

setup(
    name="bondelec",
    version=git_version(),
    description="Bond-graph screened Coulomb energy of charged particle systems",
    packages=find_packages(),
    package_data={"bondelec": ["database/default/scoring/*.yaml"]},
    python_requires=">=3.8",
    install_requires=[
        "attrs",
        "cattrs",
        "decorator",
        "numba",
        "numpy",
        "pyyaml",
        "scipy",
        "toolz",
    ],
    extras_require={
        "test": ["pytest", "pytest-benchmark", "flake8"],
    },
    setup_requires=pytest_runner,
    entry_points={"console_scripts": ["bondelec = bondelec.cli:main"]},
    zip_safe=False,
)
