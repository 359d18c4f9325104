import setuptools

DESCRIPTION = "Global and local protein alignment with identity and similarity scores."

# Runtime dependencies are pinned in requirements.txt
try:
    with open("requirements.txt", "r", encoding="utf-8") as f:
        requirements = [
            line.strip() for line in f
            if line.strip() and not line.lstrip().startswith("#")
        ]
except FileNotFoundError:
    print("Warning: requirements.txt not found. Installing without dependencies.")
    requirements = []


setuptools.setup(
    name="compseq",
    version="0.1.0",
    description=DESCRIPTION,
    long_description=DESCRIPTION,
    license="MIT",

    # compseq package plus the command line entry module
    packages=setuptools.find_packages(include=["compseq", "compseq.*"]),
    py_modules=["run_compseq"],

    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={"test": ["pytest"]},

    classifiers=[
        "Programming Language :: Python :: 3",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],
)
