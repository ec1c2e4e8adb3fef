from setuptools import setup, find_packages


setup(
    name="zipjson",
    version="1.0.0",
    packages=find_packages(include=["zipjson", "zipjson.*"]),
    description="Bundle files and folders into a single self-describing JSON archive, and restore them.",
    python_requires=">=3.11",
    install_requires=[
        "pathspec>=0.11",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "zipjson=zipjson.cli:main",
        ]
    },
)
