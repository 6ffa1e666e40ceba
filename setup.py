# setup.py
from setuptools import setup, find_packages

setup(
    name="linkwalk",
    version="0.1.0",
    description="Concurrent depth-bounded link graph walker LinkWalk",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"linkwalk.report": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "jinja2>=3.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["linkwalk=linkwalk.cli:cli"],
    },
    python_requires=">=3.11",
)
