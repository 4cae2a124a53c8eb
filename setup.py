import setuptools

readme = ""
with open("README.md", encoding="utf-8") as handle:
    readme = handle.read()

setuptools.setup(
    name="smfctl",
    version="0.1.0",
    description="Query and administer Solaris and illumos SMF services from Python.",
    long_description=readme,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(
        include=["smfctl", "smfctl.*"],
    ),
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "smfctl = smfctl.cli:main"
        ]
    },
    install_requires=[
        "cerberus>=1.3",
        "click>=8.0",
        "rich>=10.3",
        "ruamel.yaml>=0.17",
        "toolz>=0.11",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
)
