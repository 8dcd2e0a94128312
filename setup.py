"""
Setup script for the Time Ledger package.

This package provides start/stop time tracking whose state lives entirely
in a spreadsheet per client, plus the Lambda HTTP handler exposing it.
"""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="time-ledger",
    version="1.0.0",
    author="Time Ledger Team",
    description="Spreadsheet-backed start/stop time tracking engine",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "lambda", "lambda.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Office/Business :: Scheduling",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=[
        # AWS SDK (Secrets Manager credential source)
        "boto3>=1.28.85",
        "botocore>=1.31.85",

        # Service account authentication
        "PyJWT>=2.8.0",
        "cryptography>=41.0.7",

        # HTTP client
        "requests>=2.31.0",

        # IANA timezone data for zoneinfo on hosts without it
        "tzdata>=2023.3",
    ],
    extras_require={
        "dev": [
            # Testing
            "pytest>=7.4.3",
            "pytest-cov>=4.1.0",
            "pytest-asyncio>=0.21.0",

            # Code quality
            "black>=23.11.0",
            "flake8>=6.1.0",
            "mypy>=1.7.1",

            # Type stubs
            "boto3-stubs[secretsmanager]>=1.28.85",
            "types-requests>=2.31.0",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
