from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

setup(
    name="quake_parser",
    version="0.1.0",
    author="Quake Log Parser contributors",
    author_email="example@example.com",
    description="Parser for Quake 3 Arena server logs into per-match kill reports",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/username/quake_parser",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "quake-parser=quake_parser.cli:main",
        ],
    },
)
