"""Setup script for tiled_arrays package."""

from setuptools import setup, find_packages

setup(
    name='tiled_arrays',
    version='0.1',
    packages=find_packages(include=['tiled_arrays', 'tiled_arrays.*']),
    package_data={'tiled_arrays.config': ['defaults.yaml']},
    python_requires='>=3.9',
    install_requires=[
        'numpy>=1.20.0',
        'scipy>=1.9.0',
        'matplotlib>=3.3.0',
        'PyYAML>=5.4',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
)
