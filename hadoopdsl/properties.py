#!/usr/bin/env python
# encoding: utf-8

"""Property file definition module."""

from .job import HEADER
from .util import flatten, target_name, write_properties
import logging as lg
import os.path as osp


_logger = lg.getLogger(__name__)


class Properties(object):

  """Azkaban property file.

  :param name: Name of the property file, unique within its scope.
  :param options: Dictionaries of properties (cf. :class:`~hadoopdsl.job.Job`).

  Properties written in these files are visible to all jobs in the same
  directory (and below) once uploaded to Azkaban.

  """

  def __init__(self, name, *options, **kwargs):
    self.name = name
    self.properties = {}
    self.set(*options, **kwargs)

  def __repr__(self):
    return '<%s(name=%r)>' % (self.__class__.__name__, self.name)

  def set(self, *options, **kwargs):
    """Set properties, returns the property file itself."""
    for option in options + (kwargs, ):
      self.properties.update(flatten(option))
    return self

  def build(self, directory, parent_name=None):
    """Write property file.

    :param directory: Directory where the file will be created.
    :param parent_name: Optional prefix, e.g. the enclosing workflow's name.

    """
    path = osp.join(
      directory, '%s.properties' % (target_name(self.name, parent_name), )
    )
    write_properties(self.properties, path, header=HEADER)
    _logger.debug('Built property file %r as %s.', self.name, path)
    return path

  def clone(self):
    """Copy of this property file."""
    props = self.__class__(self.name)
    props.properties = dict(self.properties)
    return props
