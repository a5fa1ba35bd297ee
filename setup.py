"""
csaf-tree - Product tree & relationship core for CSAF advisory editors.

Vendors, products, versions, product families and relationships,
to and from the CSAF product_tree.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""

setup(
    name="csaf-tree",
    version="1.0.0",
    author="csaf-tree Team",
    author_email="",
    description="Product tree, product families and relationships for CSAF advisory editors.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Security",
    ],
    python_requires=">=3.9",
    install_requires=[
        "python-dotenv>=1.0.0",
        "pyyaml>=6.0.0",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "api": [
            "fastapi>=0.100.0",
            "uvicorn>=0.23.0",
        ],
        "dev": [
            "pytest>=8.0.0",
            "httpx>=0.24.0",
            "fastapi>=0.100.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
        "all": [
            "fastapi>=0.100.0",
            "uvicorn>=0.23.0",
            "pytest>=8.0.0",
            "httpx>=0.24.0",
        ],
    },
    include_package_data=True,
    keywords=[
        "csaf",
        "security-advisory",
        "product-tree",
        "vulnerability",
        "vex",
    ],
)
