from setuptools import setup, find_packages

setup(
    name="stake-overrides",
    version="0.1.0",
    description="Background updater for per-address stake weight overrides",
    packages=find_packages(include=["stake_overrides", "stake_overrides.*"]),
    python_requires=">=3.9",
    install_requires=[
        # runtime dependencies
        "requests",
        "PyYAML",
        "pydantic>=2",
        "urllib3",
        "python-json-logger",
        "python-dotenv",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-timeout>=2.4.0",
            "flake8",
        ],
    },
    entry_points={
        "console_scripts": [
            "stake-overrides=stake_overrides.cli:main",
        ],
    },
)
