# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="modulescope",
    version="0.1.0",
    description="Inspect package hierarchies and namespace-level annotations of a class universe",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["modulescope*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'modulescope=modulescope.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
