# setup.py
from setuptools import setup, find_packages

setup(
    name="kappa",
    version="0.3.0",
    description="A small Lisp interpreter with tail calls, macros and a language server",
    packages=find_packages(include=["kappa", "kappa.*", "kappa_lsp", "kappa_lsp.*"]),
    package_data={"kappa": ["prelude/*.lisp"]},
    python_requires=">=3.10",
    extras_require={
        "lsp": ["pygls>=1.1,<2", "lsprotocol"],
        "test": ["pytest", "hypothesis", "pygls>=1.1,<2", "lsprotocol"],
    },
    entry_points={
        "console_scripts": [
            "kappa=kappa.cmdline:main",
            "kappa-ls=kappa_lsp.server:main",
        ],
    },
    zip_safe=False,
)
