# setup.py
from setuptools import setup, find_packages

setup(
    name="lwhlisp",
    version="0.1.0",
    description="A small Lisp interpreter with non-hygienic macros",
    packages=find_packages(include=["lwhlisp", "lwhlisp.*", "lwhlisp_lsp", "lwhlisp_lsp.*"]),
    package_data={"lwhlisp": ["lib/*.lisp"]},
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.0,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "lwhlisp=lwhlisp.cli:main",
            "lwhlisp-format=lwhlisp.cli:format_main",
            "lwhlisp-ls=lwhlisp_lsp.server:main",
        ],
    },
    zip_safe=False,
)
