"""Setup configuration for tilepack."""
from setuptools import setup, find_packages

setup(
    name="tilepack",
    version="0.1.0",
    description="2D rectangle packing for masonry and tile layouts",
    author="Louis",
    author_email="",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.10.0",
        "pyyaml>=6.0.0",
        "numpy>=2.2.0",
    ],
    extras_require={
        "dev": [
            "pytest>=9.0.0",
            "pytest-cov>=6.0.0",
            "ruff>=0.15.0",
            "mypy>=1.19.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tilepack-run=tilepack.runner.experiment:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
