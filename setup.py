from setuptools import setup, find_packages

setup(
    name="deploy-window",
    version="0.1.0",
    description="Deployment Window Service - scheduling and Discord announcements for deployment windows",
    python_requires=">=3.10",
    packages=find_packages(include=["deploy_window", "deploy_window.*"]),
    install_requires=[
        "fastapi>=0.109.0",
        "uvicorn>=0.27.0",
        "apscheduler>=3.10.0,<4",
        "aiohttp>=3.9.0",
        "python-dotenv>=1.0.0",
        "pydantic>=2.0.0",
        "loguru>=0.7.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.23.0",
            "httpx>=0.25.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "deploy-window=deploy_window.main:main",
        ],
    },
)
