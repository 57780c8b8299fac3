from setuptools import setup, find_packages


setup(
    name="nafcodec",
    version="0.1",
    packages=find_packages(include=["nafcodec", "nafcodec.*"]),
    description="Reader for Nucleotide Archive Format (NAF) files over native files or any Python file-like object.",
    author="vercingetorx",
    python_requires=">=3.8",
    install_requires=[],
)
