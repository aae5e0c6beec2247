"""
Setup script for the job application tracker.

Allows development installation with `pip install -e .`
"""

from setuptools import setup, find_packages

setup(
    name="job-tracker",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["version"],
    package_data={"frontend": ["templates/*.html"]},
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "flask>=3.0",
        "pymongo>=4.6",
        "pydantic>=2.5",
        "pydantic-core>=2.14",
        "python-dotenv>=1.0",
        "requests>=2.31",
        "tenacity>=8.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-mock>=3.12",
        ],
    },
)
