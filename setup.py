"""
python -m build
twine upload dist/*
"""

from setuptools import setup, find_packages


def webadmin_setup():
    with open("requirements.txt", "rt") as fp:
        install_requires = fp.read().strip().split("\n")

    version = "0.3.0"

    setup(
        name="webadmin-resources",
        packages=find_packages(exclude=["tests", "examples"]),
        version=version,
        license="MIT",
        description="webadmin : declarative JSON:API resources for Flask",
        long_description=open("README.rst").read(),
        keywords=["Flask", "REST", "JsonAPI", "Swagger"],
        python_requires=">=3.8, <4",
        install_requires=install_requires,
        classifiers=[
            "Development Status :: 3 - Alpha",
            "Intended Audience :: Developers",
            "Framework :: Flask",
            "Topic :: Software Development :: Libraries",
            "Environment :: Web Environment",
            "Programming Language :: Python :: 3.12",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.9",
            "Programming Language :: Python :: 3.8",
        ],
        extras_require={"test": ["pytest>=7.0"]},
    )


webadmin_setup()  # pragma: no cover
