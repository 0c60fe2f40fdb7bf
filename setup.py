# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="mallet",
    version="0.1.0",
    description="A small Lisp interpreter with closures, macros and tail calls",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["mallet", "mallet.*"]),
    package_data={"mallet": ["prelude/*.mal"]},
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["mallet=mallet.repl:main"],
    },
    zip_safe=False,
)
