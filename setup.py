from setuptools import setup, find_packages

setup(
    name="ascent-receptionist",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*", "scripts"]),
    install_requires=[
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "httpx>=0.24",
        "python-dotenv>=1.0",
        "twilio>=8.10.0",
        "openai>=1.0",
        "fastapi>=0.100",
        "uvicorn>=0.20",
        "python-multipart>=0.0.6",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    python_requires=">=3.8",
)
