from setuptools import setup, find_packages

setup(
    name="bond_analytics",
    version="0.1.0",
    description="Single-bond price/yield analytics engine",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy",
        "pandas",
    ],
    extras_require={
        "test": [
            "pytest",
            "scipy",
        ],
    },
    entry_points={
        "console_scripts": [
            "bond-analytics=bond_analytics.cli:main",
        ],
    },
    python_requires=">=3.8",
)
