from setuptools import setup, find_namespace_packages

setup(
    name="bookshare",
    version="0.1.0",
    packages=find_namespace_packages(include=['api*', 'bookshare*', 'cli*']),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "Click",
        "SQLAlchemy>=2.0",
        "fastapi",
        "pydantic>=2",
        "uvicorn",
        "Werkzeug",
        "itsdangerous",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "bookshare=cli.main:main",
        ],
    },
)
