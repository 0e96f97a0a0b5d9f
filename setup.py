#!/usr/bin/env python3

from setuptools import setup

setup(
    name="pngme",
    version="1.0.0",
    description='Hide messages in PNG chunks',
    long_description="""A pure python package to read, edit and write the chunks of png files,
    and to hide text messages in custom chunks""",
    license='GPL-3.0',
    classifiers=[
        #   3 - Alpha
        #   4 - Beta
        #   5 - Production/Stable
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Libraries',
        'License :: OSI Approved :: GNU General Public License (GPL)',
        'Programming Language :: Python :: 3',
    ],
    keywords='png library steganography chunk',
    packages=["pngme"],
    install_requires=['requests'],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['pngme = pngme.cli:main'],
    },
    python_requires='>=3.9',
    package_data={},
    data_files=[],
)
