from setuptools import setup, find_packages

setup(
    name="keyedsiphash",
    version="0.1.0",
    description="SipHash-2-4 keyed hashing for byte streams and Python values: a streaming 64-bit engine and keyed hashers.",
    long_description=open("Readme.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    install_requires=[],
    extras_require={
        "numpy": ["numpy"],
        "test": ["pytest"],
    },
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    zip_safe=False,
)
