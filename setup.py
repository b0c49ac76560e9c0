from setuptools import setup, find_packages

setup(
    name="songgraph",
    version="0.1",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "networkx",
        "pandas",
        "pyarrow",
        "pyyaml",
        "python-dotenv",
        "loguru",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
