from pathlib import Path
from setuptools import find_namespace_packages, setup

README = Path(__file__).parent / "README.md"

setup(
    name="aliesce",
    version="0.1.0",
    description="Save and run scripts in different languages kept in one annotated source file",
    long_description=README.read_text(encoding="utf-8") if README.exists() else "",
    long_description_content_type="text/markdown",
    author="aliesce contributors",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["aliesce", "aliesce.*"]),
    extras_require={"test": ["pytest>=7"]},
    entry_points={"console_scripts": ["aliesce = aliesce.cli:main"]},
)
