from setuptools import setup, find_packages


setup(
    name="pngme",
    version="0.1",
    packages=find_packages(),
    description="Hide messages in PNG chunks, with a strict CRC-checked chunk codec.",
    python_requires=">=3.7",
    install_requires=[],
    entry_points={
        "console_scripts": [
            "pngme=pngme.cli:main",
        ]
    },
)
