from setuptools import setup, find_packages

setup(
    name="lifegrid",
    version="0.1.0",
    description="Conway's Game of Life on finite grids with GPU-accelerated stepping and 3D visualization",
    author="lifegrid contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    install_requires=[
        "torch>=1.7.0",
        "numpy>=1.19.0",
        "vispy>=0.6.6",
        "PyQt5>=5.15.0",
    ],
    extras_require={
        "test": ["pytest>=6.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "lifegrid=main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Topic :: Scientific/Engineering :: Artificial Life",
    ],
)
