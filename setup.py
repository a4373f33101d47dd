"""
Setup script for the SnapAPI Python SDK
"""
from setuptools import setup, find_packages

setup(
    name="snapapi",
    version="1.0.0",
    packages=find_packages(include=["snapapi", "snapapi.*"]),
    install_requires=[
        "httpx>=0.27.0",
        "pydantic>=2.8.0",
        "python-dotenv>=1.0.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    python_requires=">=3.9",
    description="SnapAPI SDK - Python client for screenshots, PDFs, videos and content extraction",
    author="SnapAPI Team",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
