#!/usr/bin/env python
# -*- coding: utf-8 -*-

import os
import re
from setuptools import setup


def strip_comments(line):
    return line.split('#')[0]


def file_path(*parts):
    CUR_DIR = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(CUR_DIR, *parts)


desc = 'A fluent element search and interaction layer over selenium for end-to-end web tests'

with open(file_path('fluent_webtest/VERSION')) as f:
    version = ''.join(map(strip_comments, f.readlines())).strip()
    version = re.sub('^v', '', version)

with open(file_path('README.md')) as f:
    long_description = f.read()

setup(
    name='fluent-webtest',
    version=version,
    packages=['fluent_webtest'],
    package_data={"fluent_webtest": ['templates/*.html', 'VERSION']},
    license='Apache Software License 2.0',
    description=desc,
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires='>=3.8',
    install_requires=[
        'pytest>=7.0',
        'jinja2',
        'selenium>=4.11',
        'pydantic>=2.0',
        'pydantic-settings>=2.0',
    ],
    classifiers=[
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'Framework :: Pytest',
        'License :: OSI Approved :: Apache Software License',
    ],
    entry_points={
        'pytest11': [
            'fluent-webtest = fluent_webtest.plugin',
        ],
    },
)
