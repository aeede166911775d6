import sys

from setuptools import setup

if sys.version_info < (3, 9):
    raise RuntimeError("formdata-builder requires Python 3.9+")


setup()
