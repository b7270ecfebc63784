from setuptools import setup, find_packages

setup(
    name="offtarget",
    version="1.0.0",
    description="Prediction of CRISPR guide RNA off-target sites by seed and PAM scanning with bounded mismatches",
    packages=find_packages(include=["offtarget", "offtarget.*"]),
    install_requires=[
        "biopython",
        "pandas",
        "numpy",
        "tqdm",
        "colorama",
        "openpyxl",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'offtarget=offtarget.pipeline:main',
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Programming Language :: Python :: 3",
    ],
    python_requires=">=3.8",
)
