# SPDX-License-Identifier: LGPL-3.0-or-later
from setuptools import setup, find_packages

setup(
    name="ovf2vmware",
    version="0.1.0",
    description="Make VirtualBox OVF exports importable by VMware with minimal, format-preserving edits",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[l.strip() for l in open("requirements.txt", encoding="utf-8") if l.strip() and not l.startswith("#")],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["ovf2vmware=ovf2vmware.__main__:main"]},
)
