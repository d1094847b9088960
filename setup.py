"""Setup script for streambind."""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
  long_description = fh.read()

setup(
  name="streambind",
  version="0.1.0",
  author="streambind Contributors",
  description="Binding and validation of datastream definitions against Kafka clusters",
  long_description=long_description,
  long_description_content_type="text/markdown",
  packages=find_packages(include=["engine", "engine.*", "apps", "apps.*"]),
  py_modules=["streambind_cli"],
  python_requires=">=3.11",
  install_requires=[
    "pydantic>=2.5",
    "confluent-kafka>=2.3.0",
    "fastapi>=0.110.0",
    "rich>=13.0.0",
  ],
  extras_require={
    "test": [
      "pytest>=7.4",
      "httpx>=0.25.0",
    ],
  },
  entry_points={
    "console_scripts": [
      "streambind=streambind_cli:main",
    ],
  },
  classifiers=[
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Topic :: Software Development :: Libraries",
    "License :: OSI Approved :: Apache Software License",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
  ],
)
