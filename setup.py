from setuptools import setup, find_namespace_packages

setup(
    name="user-api",
    version="0.1.0",
    packages=find_namespace_packages(include=["user_api", "user_api.*"]),
    py_modules=["main"],
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.100.0",
        "uvicorn>=0.24.0",
        "python-dotenv>=0.19.0",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "pymysql>=1.0.0",
        "sqlalchemy>=1.4.0",
        "passlib[argon2]>=1.7.4",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "httpx>=0.24.0",
        ],
    },
)
