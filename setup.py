from setuptools import setup, find_packages

setup(
    name="ncaa-four-factors",
    version="0.1.0",
    description="NCAA basketball box score ingestion with Four Factors season standings",
    author="Ben Rosen",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pandas>=1.5.3",
        "pytz>=2022.7",
        "requests>=2.31.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "four-factors=src.main:main",
        ],
    },
)
