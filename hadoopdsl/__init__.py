#!/usr/bin/env python
# encoding: utf-8

"""Hadoop DSL: declare Azkaban workflows in python."""

__all__ = [
  'Factory', 'HadoopDsl', 'HadoopDslError', 'Job', 'NamedScope', 'Properties',
  'Workflow',
]
__version__ = '0.1.0'

from .dsl import HadoopDsl
from .factory import Factory
from .job import Job
from .properties import Properties
from .scope import NamedScope
from .util import HadoopDslError
from .workflow import Workflow

import logging as lg


# docopt arguments are made available here by the CLI
CLI_ARGS = {}

lg.getLogger(__name__).addHandler(lg.NullHandler())
