from setuptools import setup, find_packages

setup(
    name="vml_shapes",
    version="0.1.0",
    description="Convert VML drawings embedded in Word documents into SVG-ready shape trees",
    author="",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pydantic>=2.0.0",
        "pyyaml>=6.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "vml-shapes=vml_shapes.main:main",
        ],
    },
    python_requires=">=3.9",
)
