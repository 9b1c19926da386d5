from setuptools import setup, find_packages

setup(
    name='quatvec',
    version='1.0.0',
    description='Double precision vectors and quaternions for rotating and transforming points',
    packages=find_packages(include=['quatvec', 'quatvec.*']),
    python_requires='>=3.11',
    install_requires=['numpy', 'pandas'],
    extras_require={'test': ['pytest', 'scipy']},
)
