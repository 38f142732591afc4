"""Setup script for relmap."""

from pathlib import Path

from setuptools import find_packages, setup


def read_version():
    """Read __version__ from the package without importing it."""
    init = Path(__file__).parent / "relmap" / "__init__.py"
    for line in init.read_text(encoding="utf-8").splitlines():
        if line.startswith("__version__"):
            return line.split("=", 1)[1].strip().strip("\"'")
    raise RuntimeError("Unable to find __version__ in relmap/__init__.py")


setup(
    name="relmap",
    version=read_version(),
    description="Convention-driven relation mapping and lifecycle hooks for SQLAlchemy record kinds",
    python_requires=">=3.10",
    packages=find_packages(include=["relmap", "relmap.*"]),
    install_requires=[
        "sqlalchemy>=2.0",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "dependency-injector>=4.41",
        "click>=8.1",
        "inflection>=0.5",
        "tomli>=2.0; python_version < '3.11'",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "relmap=relmap.__main__:main",
        ],
    },
)
