from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="flare",
    version="v0.3.0",
    author="FLARE Project",
    description="Flight Layout And Route Edge-bundling - bundled flight route maps",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["flare", "flare.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Visualization",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.31.0",
        "pyyaml>=6.0",
        "folium>=0.15.0",
        "branca>=0.7.0",
        "numpy>=1.24",
        "scipy>=1.10",
        "pandas>=2.0",
        "networkx>=3.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "responses>=0.23.0",
        ],
    },
)
