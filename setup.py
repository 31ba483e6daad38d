from setuptools import setup, find_packages

setup(
    name='calGridPy',
    version='0.1.0',
    description='Date grid engine for month and week calendar views, with a CLI that prints the grid as a table.',
    author='René Lachmann',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'python-dateutil',
        'pytz',
        'tabulate',
        'python-dotenv',
        'markdown',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'calgrid=calgrid.__main__:main',
        ],
    },
    include_package_data=True,
    package_data={
        '': ['calgrid.env.example'],
    },
    python_requires='>=3.8',
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
)
