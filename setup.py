from setuptools import setup, find_packages
import pathlib

here = pathlib.Path(__file__).parent.resolve()

long_description = (here / "README.md").read_text(encoding="utf-8")

setup(
    name="panos-xml-client",
    version="1.0.0",
    author="Eric Chickering",
    author_email="eric.chickering@gmail.com",
    description="Object oriented client for the PAN-OS XML API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    install_requires=[
        "PyYAML>=6.0",
        "requests>=2.28.1",
        "urllib3>=1.26.12",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        # Choose appropriate classifiers
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: ISC License (ISCL)",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
)
