# magpie-config/setup.py
from setuptools import find_packages, setup

setup(
    name="magpie-config",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        # Config parsing/validation
        "PyYAML>=6.0",
        "pydantic>=2.0",
        "python-dotenv>=0.19.0",
        # Stimuli tables
        "pandas>=1.3.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.2.5",
            "black>=22.0.0",
            "isort>=5.10.0",
            "pylint>=2.15.0",
            "pytest-cov>=3.0.0",
        ],
    },
    python_requires=">=3.8,<3.14",
    description="Deployment configuration profiles for magpie behavioural experiments",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
