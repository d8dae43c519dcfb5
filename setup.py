from setuptools import setup, find_packages

setup(
    name="weaviate_query",
    version="0.1.0",
    packages=find_packages(include=["weaviate_query", "weaviate_query.*"]),
    install_requires=[
        "pyyaml",  # For config file parsing
        "python-dotenv",  # For .env loading before ${VAR} substitution
        "httpx",  # For the GraphQL/REST transport
        "tenacity",  # For retrying connection failures
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
            "graphql-core>=3.2,<3.3",  # For parsing rendered documents in tests
        ],
    },
    python_requires=">=3.9",
)
