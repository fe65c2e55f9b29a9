from setuptools import find_packages, setup

setup(
    name="flankstep",
    version="0.1.0",
    description="Download flank, run it and export the latest results for a CI pipeline",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        "requests",
        "PyYAML",
        "packaging",
        "rich",
        "platformdirs",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "flankstep=flankstep.cli:main",
        ],
    },
)
