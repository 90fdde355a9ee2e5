"""Setup configuration for device-discover tool."""

from setuptools import setup, find_packages

setup(
    name="device-discover",
    version="0.1.0",
    description="UDP broadcast discovery client for network devices",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "click>=8.1.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "device-discover=device_discovery.cli:main",
        ],
    },
)
