import re

from setuptools import find_packages, setup


with open("termprompt/__init__.py", "rb") as fh:
    init_text = fh.read().decode()
    VERSION = re.search(r"__version__ = \"(.*?)\"", init_text).group(1)

setup(
    name="termprompt",
    version=VERSION,
    packages=find_packages(
        exclude=["tests", "tests.*", "examples", "examples.*"]
    ),
    python_requires=">=3.7.0",
    install_requires=[],
    extras_require={
        "tests": ["pytest"],
    },
    license="MIT",
    description="Styled terminal output and interactive prompts, with raw-mode key handling.",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    zip_safe=True,
    entry_points={
        "console_scripts": [
            "termprompt = termprompt:cli",
        ],
    },
)
