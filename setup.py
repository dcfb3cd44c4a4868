"""Install UMN Shibboleth helper package."""

from setuptools import setup, find_packages

setup(
    name='umnshib',
    version='0.1.0',
    packages=find_packages(exclude=['*test*']),
    install_requires=[
        "flask",
        "werkzeug",
        "pytz",
        "python-dateutil",
        "python-json-logger>=3.1",
    ],
    extras_require={
        'test': [
            "pytest",
            "hypothesis",
        ]
    },
    zip_safe=False
)
