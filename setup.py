from setuptools import setup, find_packages


DESCRIPTION = (
    "Tool which runs the inflation solver on model configurations "
    "and collects its output files."
)

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="cosmo-runner",
    version="1.0.0",
    description=DESCRIPTION,
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests", "tests.*")),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "argcomplete",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "crun = cosmo_runner.crun:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
    ],
)
