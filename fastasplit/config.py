#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
---------
config.py
---------

This defines the methods that load and validate user defined
parameters.
Usage
>>> from fastasplit.config import defaults
>>> print(defaults.max_lines)
3
>>> from fastasplit.config import Defaults
>>> local_defaults = Defaults("config.txt")
>>> print(local_defaults.chunk_template)
{path}_c{index}.fasta
>>> print(local_defaults.email)
Traceback (most recent call last):
...
AttributeError: 'Defaults' object has no attribute 'email'"""

import logging
from configparser import ConfigParser
from os import path

__all__ = ["defaults", "Defaults"]

logger = logging.getLogger(__name__)

_INTEGER_OPTIONS = ('max_lines', 'megabyte')


class Defaults(object):
    def __init__(self, config_file=None):
        default_config = path.join(path.dirname(__file__), "config.txt")
        config = ConfigParser(interpolation=None)
        config_default = config_file or default_config
        config.read(config_default)
        self.__config = config
        self.__populate_attributes()

    def __populate_attributes(self):
        for section in self.__config.sections():
            for var_name, var_par in self.__config.items(section):
                if var_par == "...":
                    logger.warning("Update the config.txt file...")
                # Numeric settings are used directly in chunk arithmetic
                if var_name in _INTEGER_OPTIONS:
                    var_par = int(var_par)
                setattr(self, var_name, var_par)

defaults = Defaults()
