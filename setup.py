#!/usr/bin/env python
from setuptools import setup
import os


def get_version():
    curdir = os.path.dirname(__file__)
    filename = os.path.join(curdir, 'src', 'zpl2image', 'version.py')
    with open(filename, 'rb') as fp:
        return fp.read().decode('utf8').split('=')[1].strip(" \n'")


def readme():
    curdir = os.path.dirname(__file__)
    with open(os.path.join(curdir, 'README.rst')) as f:
        return f.read()


setup(
    name='zpl2image',
    version=get_version(),
    description='Rasterize SVG label descriptions into bitmap images',
    long_description=readme(),
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Multimedia :: Graphics',
        'Topic :: Multimedia :: Graphics :: Graphics Conversion',
        'Topic :: Printing',
    ],
    keywords='zpl svg label rasterize png',
    license='LGPL-3.0-or-later',
    package_dir={'': 'src'},
    packages=[
        'zpl2image',
        'zpl2image.rasterizer',
    ],
    python_requires='>=3.10',
    install_requires=[
        'pillow>=9.1',
        'numpy',
        'resvg-py',
    ],
    extras_require={
        'test': [
            'pytest'],
    },
    include_package_data=True,
    entry_points={
        'console_scripts': ['zpl2image-rasterize=zpl2image.rasterizer.__main__:main']
    },
    tests_require=['pytest'],
    )
