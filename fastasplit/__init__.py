#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging
import sys

logging.getLogger("fastasplit").addHandler(logging.NullHandler())
logging.captureWarnings(True)
logging.basicConfig(stream=sys.stderr, level=logging.INFO,
                    format='%(asctime)s %(name)-12s %(levelname)-8s %(message)s')


__title__ = 'fastasplit'
__version__ = '0.1.0'
__license__ = 'GPLv3'
__authors__ = 'Robert Schmieder'
