
from setuptools import setup
import re
import io

__version__ = re.search(
    r'__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
    io.open('htan_catalog/__init__.py', encoding='utf_8_sig').read()
    ).group(1)

setup(
    name='htan_catalog',
    description='HTAN Data Catalogue Resolution Utilities',
    version=__version__,
    zip_safe=False,
    packages=[
        'htan_catalog',
    ],
    scripts=[],
    python_requires='>=3.7',
    install_requires=[
        'deriva>=1.5.0',
        'requests',
    ],
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        'Intended Audience :: Developers',
        'Programming Language :: Python',
        'Topic :: Software Development :: Libraries :: Python Modules'
    ])
