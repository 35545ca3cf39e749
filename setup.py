import setuptools

try:
    with open("README.md", "r", encoding="utf-8") as fh:
        long_description = fh.read()
except FileNotFoundError:
    long_description = "Deploy and manage applications on the Dibbla platform"

setuptools.setup(
    name="dibbla-cli",
    version="0.1.0",
    author="Dibbla",
    description="Deploy and manage applications on the Dibbla platform",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src", include=["dibbla", "dibbla.*"]),
    include_package_data=True,
    install_requires=[
        "httpx>=0.27",
        "pydantic>=2.0",
        "python-dotenv>=1.0",
        "questionary>=2.0",
        "rich>=13.0",
        "typer>=0.12",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "dibbla=dibbla.cli.main:app",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
