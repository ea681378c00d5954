"""Install the OAuth2 client registry."""

from setuptools import setup, find_packages

setup(
    name='oauth2-client-registry',
    version='0.1.0',
    packages=find_packages(include=['client_registry', 'client_registry.*'],
                           exclude=['*tests*']),
    py_modules=['create_client'],
    install_requires=[
        "flask",
        "flask-sqlalchemy",
        "sqlalchemy",
        "authlib",
        "bcrypt",
        "pyjwt",
        "python-json-logger",
        "pytz",
        "click",
    ],
    extras_require={
        'test': ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'create-oauth2-client=create_client:create_client',
        ],
    },
    zip_safe=False
)
