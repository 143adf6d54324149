from setuptools import setup, find_packages

setup(
    name="watchmanlite",
    version="0.1.0",
    description="Small synchronous client for the watchman file-watching daemon",
    license="MIT",
    packages=find_packages(include=["watchmanlite", "watchmanlite.*"]),
    install_requires=[
        "typer>=0.9.0",
        "rich>=13.0.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "watchmanlite=watchmanlite.main:watchmanlite",
        ],
    },
    python_requires=">=3.10",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
)
