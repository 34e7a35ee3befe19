"""Install the signed session cookie authenticator."""

from setuptools import setup, find_packages

setup(
    name='cookieauth',
    version='0.1.0',
    packages=find_packages(exclude=['*test*']),
    python_requires='>=3.9',
    install_requires=[
        "fastapi",
        "pydantic>=2",
        "redis>=5.0.1",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "hypothesis",
            "httpx",
        ],
    },
    zip_safe=False
)
