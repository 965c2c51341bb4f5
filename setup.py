# setup.py
from setuptools import setup, find_packages

setup(
    name='immutableui',
    version='0.1.0',
    description='Reconcile immutable declarative UI descriptions onto live, mutable widget objects.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',

    # Finds the `immutableui` and `immutableui_cli` packages
    packages=find_packages(include=['immutableui', 'immutableui.*', 'immutableui_cli', 'immutableui_cli.*']),

    # These are the dependencies the package needs to run.
    install_requires=[
        'PySide6',
        'typer',
        'PyYAML',
    ],
    extras_require={
        'test': ['pytest'],
    },

    # Creates an executable script named `immutableui` that calls the `app`
    # object inside `immutableui_cli.main`.
    entry_points={
        'console_scripts': [
            'immutableui = immutableui_cli.main:app',
        ],
    },

    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: User Interfaces',
    ],
    python_requires='>=3.10',
)
