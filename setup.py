from setuptools import setup, find_packages

setup(
    name="page-digest",
    version="0.1.0",
    description="Five-point factual summaries of web articles using a hosted completion model",
    author="Your Name",
    author_email="your.email@example.com",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.111.0",
        "uvicorn>=0.29.0",
        "langgraph>=0.1.0",
        "pydantic>=2.0",
        "httpx>=0.27.0",
        "beautifulsoup4>=4.12.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "ui": ["streamlit>=1.30.0"],
        "test": ["pytest>=8.0", "pytest-asyncio>=0.23.0"],
    },
)
