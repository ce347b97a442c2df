from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="rwhsim",
    version="0.1.0",
    description="Rainwater harvesting tank sizing model",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires='>=3.10',
    install_requires=[
        "pandas",
        "numpy",
        "matplotlib",
        "seaborn",
        "dynaconf",
        "pyyaml",
        "joblib>=1.3",
        "tqdm",
        "pint",
        "pint-pandas",
        "tables",
        "ipython",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "rwhsim=rwhsim.main:main",
            "rwhsim-plot=rwhsim.plots:plot_all",
        ],
    },
)
