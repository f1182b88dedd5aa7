from setuptools import setup, find_packages

setup(
    name="image-clusterizer",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    package_data={
        "clusterizer": ["config/*.yaml"],
    },
    install_requires=[
        "numpy",
        "pyyaml",
    ],
    extras_require={
        "examples": ["Pillow"],
        "test": ["pytest"],
    },
)
