#!/usr/bin/env python
import os
import re

from setuptools import setup, find_packages


def read(name):
    filename = os.path.join(os.path.dirname(__file__), name)
    with open(filename) as fp:
        return fp.read()


def version():
    init = read(os.path.join('couchconnector', '__init__.py'))
    bits = re.search(r'VERSION = \((\d+), (\d+), (\d+)', init).groups()
    return '.'.join(bits)


def requirements(name):
    install_requires = []
    for line in read(name).split('\n'):
        line = line.strip()
        if line and not line.startswith('#'):
            install_requires.append(line)
    return install_requires


meta = dict(
    name='couchconnector',
    version=version(),
    description='Asynchronous CouchDB connector for object persistence '
                'frameworks',
    license="BSD",
    long_description=read('README.rst'),
    include_package_data=True,
    python_requires='>=3.8',
    install_requires=requirements('requirements/hard.txt'),
    extras_require={'test': requirements('requirements/test.txt')},
    packages=find_packages(include=['couchconnector', 'couchconnector.*']),
    entry_points={
        "console_scripts": [
            "couchconnector = couchconnector.commands:main"
        ]
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Framework :: AsyncIO',
        'Topic :: Database',
        'Topic :: Software Development :: Libraries :: Python Modules']
)


if __name__ == '__main__':
    setup(**meta)
