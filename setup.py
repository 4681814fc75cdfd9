#!/usr/bin/env python
# Copyright (c) 2016, Juniper Networks, Inc.
# All rights reserved.
#
# Copyright (C) 2012 Martin Blech and individual contributors.
#
# See the LICENSE file for further information.

from setuptools import setup

import xmltree

setup(name='xmltree',
      version=xmltree.__version__,
      description=xmltree.__doc__.splitlines()[0],
      long_description=xmltree.__doc__,
      author=xmltree.__author__,
      license=xmltree.__license__,
      platforms=['all'],
      classifiers=[
          'Intended Audience :: Developers',
          'License :: OSI Approved :: MIT License',
          'Operating System :: OS Independent',
          'Programming Language :: Python',
          'Programming Language :: Python :: 3',
          'Programming Language :: Python :: Implementation :: PyPy',
          'Topic :: Text Processing :: Markup :: XML',
      ],
      packages=['xmltree'],
      python_requires='>=3.8',
      install_requires=['lxml'],
      extras_require={'test': ['pytest']},
      )
