from setuptools import setup, find_packages

setup(
    name="minutes-typesetter",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "reportlab>=4.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=4.9.0",
        "pdfplumber>=0.10.0",
        "click>=8.1.0",
        "pyyaml>=6.0",
        "python-dateutil>=2.8.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "minutes-typesetter=minutes_typesetter.cli:cli",
        ],
    },
)
