from setuptools import setup, find_packages

setup(
    name="backup-policer",
    version="1.0.0",
    description="Tiered retention policy: select which timestamped backups may be deleted",
    author="DepInfo Omega Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[],
    extras_require={
        "test": [
            "pytest>=7.0.0"
        ],
    },
    entry_points={
        'console_scripts': [
            'backup-policer=src.policer.cli:main',
        ],
    },
    python_requires='>=3.8',
)
