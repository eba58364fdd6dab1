# setup.py
from setuptools import setup, find_packages

setup(
    name="mehl",
    version="0.1.0",
    description="Mehl: a small language where every function takes one value and returns one value",
    packages=find_packages(include=["mehl", "mehl.*", "mehl_lsp", "mehl_lsp.*"]),
    package_data={"mehl.prelude": ["*.mehl"]},
    python_requires=">=3.11",
    install_requires=[
        "pygls>=1.1,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["mehl=mehl.cmdline:main"],
    },
    zip_safe=False,
)
