from setuptools import setup, find_packages

setup(
    name='snapbckp',
    version='0.1',
    packages=find_packages(exclude=['tests']),
    include_package_data=True,
    python_requires='>=3.6',
    install_requires=[
        'Click',
        'colorama',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points='''
        [console_scripts]
        snapbckp=snapbckp.commands:cli
    ''',
)
