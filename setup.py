from setuptools import setup, find_namespace_packages

setup(
    name="kushon",
    version="0.1.0",
    packages=find_namespace_packages(include=['api*', 'kushon*']),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "SQLAlchemy>=2.0",
        "pydantic>=2.0",
        "fastapi",
        "Jinja2",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
