#!/usr/bin/env python3
"""
Setup script for the ONVIF SOAP client
"""

from setuptools import setup, find_packages
import os

# Read README for long description
def read_file(filename):
    with open(os.path.join(os.path.dirname(__file__), filename), encoding='utf-8') as f:
        return f.read()

setup(
    name='onvifsoap',
    version='1.0.0',
    description='ONVIF SOAP client - authenticated SOAP 1.2 requests for ONVIF cameras',
    long_description=read_file('README.md'),
    long_description_content_type='text/markdown',
    author='Brown Fine Security',
    author_email='',
    license='MIT',
    packages=find_packages(exclude=['tests', 'tests.*']),
    entry_points={
        'console_scripts': [
            'onvifsoap=onvifsoap.cli:main',
        ],
    },
    install_requires=[
        'requests>=2.25.0',
        'colorama>=0.4.4',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'requests-mock>=1.9',
        ],
    },
    python_requires='>=3.7',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.7',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: System :: Networking',
    ],
    keywords='onvif soap ws-security camera iot',
)
