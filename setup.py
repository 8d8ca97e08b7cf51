from setuptools import setup, find_packages

setup(
    name="afyaconnect",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110.0",
        "uvicorn[standard]",
        "gunicorn",
        "pydantic>=2.0.0",
        "python-multipart",
        "httpx",
        "slowapi",
        "prometheus-client",
        "itsdangerous",
        "bcrypt",
        "psycopg2-binary>=2.9.0",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
)
