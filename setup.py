from setuptools import setup, find_packages

with open("README.md", "r") as fh:
    long_description = fh.read()

setup(
    name="refquad",
    version="0.0.1",
    description="Quadrature rules on reference elements",
    keywords="quadrature numerical integration reference element finite elements",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"refquad": ["py.typed"]},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
    ],
    long_description=long_description,
    long_description_content_type="text/markdown",
    install_requires=[
        "numpy",
        "scipy",
    ],
    extras_require={
        "dev": [
            "pytest>=7.1",
            "black == 22.3.0",
        ],
    },
    python_requires=">=3.11",
    platforms=["Linux", "Windows"],
    license="Apache v2",
)
