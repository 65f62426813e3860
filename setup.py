# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="contextshare",
    version="1.0.0",
    description="Select files from a folder tree and compile them into one prompt-ready text artifact",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["contextshare*"]),
    package_data={
        "contextshare.interface": ["locales/*.json"],
    },
    install_requires=[
        "customtkinter",  # GUI
        "tiktoken",  # Token estimate of the compiled output
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'contextshare=contextshare.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
