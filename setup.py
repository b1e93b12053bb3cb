from setuptools import setup, find_packages

setup(
    name="infrawatch",
    version="0.1.0",
    description="Correlated synthetic infrastructure telemetry and node health simulation for live dashboards",
    author="adamfilli",
    packages=find_packages(include=["infrawatch", "infrawatch.*"]),
    install_requires=[
        "matplotlib",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
