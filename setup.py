#!/usr/bin/env python3

from pathlib import Path
from setuptools import setup, find_packages
import re

def version():
    init = Path(__file__).parent / 'scalemenu' / '__init__.py'
    return re.search(r"^__version__ = '([^']+)'", init.read_text(), re.MULTILINE).group(1)

def long_description():
    readme = Path(__file__).parent / 'README.md'
    return readme.read_text() if readme.is_file() else ''

setup(
    name='scalemenu',
    version=version(),
    author='The scalemenu authors',
    description='Scalable on-screen layouts from algebraic position expressions and weighted grids',
    long_description=long_description(),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests']),
    package_data={'scalemenu.layoutserve_data': ['*.html']},
    include_package_data=True,
    install_requires=['click', 'rtree', 'quart'],
    extras_require={
        'tests': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'scalemenu = scalemenu.cli:cli',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',
        'Natural Language :: English',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: Software Development :: Libraries',
        'Topic :: Software Development :: User Interfaces',
        'Typing :: Typed',
    ],
    keywords='layout gui expression grid',
    python_requires='>=3.10',
)
