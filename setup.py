# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="smartassets",
    version="0.1.0",
    description="Keep pubspec.yaml assets and a generated Dart constants file in sync with a Flutter assets/ folder",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["smartassets", "smartassets.*"]),
    install_requires=[
        "ruamel.yaml>=0.17",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'smartassets=smartassets.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
