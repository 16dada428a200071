from setuptools import setup, find_packages

setup(
    name="squares",
    version="0.1.0",
    packages=find_packages(include=["squares", "squares.*"]),
    py_modules=["run"],
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "gymnasium",
        "fastapi",
        "pydantic>=2",
        "uvicorn",  # ASGI server for `run.py serve`
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",  # required by fastapi.testclient
        ],
    },
)
