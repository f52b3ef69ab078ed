"""Build configuration for wsgiquery."""
from setuptools import find_packages, setup

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="wsgiquery",
    version="0.1.0",
    description="Form-urlencoded query string decoding for WSGI requests",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "werkzeug>=2.3",
    ],
    extras_require={
        "test": [
            "pytest>=7",
        ],
    },
)
