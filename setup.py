from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="chronoparse",
    version="0.0.1",
    author="Peter Cotton",
    author_email="",
    description="Natural-language date, time and ISO week extraction",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/petercotton/chronoparse",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        'chronoparse': ['locales/en/*.yaml'],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.7",
    install_requires=[
        "python-dateutil>=2.8.0",
        "pyyaml>=5.4",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0", "isoweek>=1.3.0"],
    },
)
