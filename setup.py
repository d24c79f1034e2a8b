from pathlib import Path
from setuptools import find_namespace_packages, setup

HERE = Path(__file__).parent


def _version() -> str:
    for line in (HERE / "src" / "tagwalk" / "__init__.py").read_text(encoding="utf-8").splitlines():
        if line.startswith("__version__"):
            return line.split("=", 1)[1].strip().strip("'\"")
    raise RuntimeError("__version__ not found")


setup(
    name="tagwalk",
    version=_version(),
    description="Input resolution and dispatch engine for source-code tag indexing",
    author="GAHEOS",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["tagwalk", "tagwalk.*"]),
    install_requires=[],
    extras_require={"test": ["pytest>=7"]},
    entry_points={"console_scripts": ["tagwalk=tagwalk.cli:main"]},
)
