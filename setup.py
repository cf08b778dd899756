# setup.py
from setuptools import setup, find_packages

setup(
    name="bytevm",
    version="0.1.0",
    description="A small stack-based bytecode virtual machine",
    packages=find_packages(include=["bytevm", "bytevm.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["bytevm = bytevm.cli:main"],
    },
    zip_safe=False,
)
