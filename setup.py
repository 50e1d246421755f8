"""Setup script for entity-to-model"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
this_directory = Path(__file__).parent
long_description = ""
readme_path = this_directory / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

setup(
    name="entity-to-model",
    version="0.1.0",
    description="Analyzer and code fix that generate model classes for @Table entity classes",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Code Generators",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "tree-sitter>=0.23.0",
        "tree-sitter-python>=0.23.0",
        "rich>=13.0.0",
        'tomli>=1.1.0; python_version < "3.11"',
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
        ],
    },
    keywords="code-generation static-analysis orm entity model tree-sitter",
)
