from setuptools import setup, find_packages

setup(
    name="lottery-insight",
    version="1.0.0",
    packages=find_packages(exclude=["lottery_insight.tests"]),
    install_requires=[
        "numpy",
        "pandas",
        "matplotlib",
        "seaborn",
        "scipy",
        "marshmallow>=3.13.0",
        "pyyaml",
        "requests",
        "tzdata"
    ],
    extras_require={
        "test": ["pytest"]
    },
    entry_points={
        "console_scripts": [
            "lottery-insight=lottery_insight.main:main"
        ]
    },
    python_requires=">=3.9",
)
