# setup.py

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name='lazyfuse',
    version='0.1.0',
    author='Justin Arndt',
    author_email='justinarndtai@gmail.com',
    description='Lazy, loop-fused elementwise operators for existing Python collections',
    long_description=long_description,
    long_description_content_type="text/markdown",
    # The benchmark and example scripts are run from a checkout, not installed.
    packages=find_packages(include=['lazyfuse', 'lazyfuse.*']),
    install_requires=[],
    extras_require={
        'bench': ['numpy', 'pandas'],
        'test': ['pytest', 'numpy'],
    },
    entry_points={
        'console_scripts': [
            'lazyfuse-prof=lazyfuse.tools.profiler_cli:main',
        ],
    },
    zip_safe=False,
    python_requires='>=3.8',
)
