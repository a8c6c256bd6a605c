from setuptools import setup, find_packages

setup(
    name="gmclient",
    version="0.1.0",
    description="Async client for the GermanMiner API",
    packages=find_packages(include=["gmclient", "gmclient.*"]),
    python_requires=">=3.10",
    install_requires=[
        "httpx>=0.27",
        "pydantic>=2.6",
        "pydantic-settings>=2.2",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "respx>=0.21",
        ],
    },
)
