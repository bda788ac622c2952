#!/usr/bin/env python
# encoding: utf-8

"""Workflow definition module."""

from collections import deque
from .factory import Factory
from .methods import DslMethods
from .scope import NamedScope, NamedScopeContainer
from .util import Adapter, HadoopDslError, target_name
import logging as lg
import warnings as wr


_logger = lg.getLogger(__name__)

#: Name of the workflow built without launch job nor name prefix.
DEFAULT = 'default'


class Workflow(NamedScopeContainer, DslMethods):

  """Azkaban workflow.

  :param name: Name of the workflow. Azkaban will display the flow under this
    name (qualified by any parent name used when building).
  :param factory: :class:`~hadoopdsl.factory.Factory` used to create jobs and
    property files.
  :param next_level: Enclosing :class:`~hadoopdsl.scope.NamedScope`. Names not
    found in the workflow are looked up there.

  All jobs declared in the workflow are kept, but only those reachable from
  the launch job (i.e. from the names passed to :meth:`executes`) are built.

  """

  def __init__(self, name, factory=None, next_level=None):
    self.name = name
    self.factory = factory or Factory()
    self.jobs = []
    self.properties = []
    self.launch_job = self.factory.make_launch_job(name)
    self.launch_dependencies = []
    self.scope = NamedScope(name, next_level)
    self._logger = Adapter(repr(self), _logger)
    self._logger.debug('Instantiated.')

  def __repr__(self):
    return '<%s(name=%r)>' % (self.__class__.__name__, self.name)

  def __str__(self):
    return self.name

  def executes(self, *names):
    """Declare the jobs run by this workflow.

    :param names: Job names. Their dependencies will be included as well.

    """
    for name in names:
      if not name in self.launch_dependencies:
        self.launch_dependencies.append(name)

  def depends(self, *names):
    """Deprecated alias of :meth:`executes`."""
    wr.warn(
      '`Workflow.depends` is deprecated, use `Workflow.executes` instead.',
      DeprecationWarning,
      stacklevel=2,
    )
    self.executes(*names)

  def build_job_list(self, launch_job):
    """Compute the jobs required by a job, breadth-first.

    :param launch_job: Root job.

    Each job's dependencies are resolved in the workflow's scope along the
    way. Returns a list of distinct jobs, in discovery order (starting with
    `launch_job`), which is also the order in which they are built.

    """
    queue = deque([launch_job])
    job_list = {}
    while queue:
      job = queue.popleft()
      job.update_dependencies(self.scope)
      job_list[job] = None
      for dependency in job.dependencies:
        if not dependency in job_list:
          queue.append(dependency)
    return list(job_list)

  def build(self, directory, parent_name=None):
    """Write job and property files.

    :param directory: Output directory.
    :param parent_name: Optional prefix, prepended to the workflow's name.

    Returns the list of paths written.

    """
    if self.name == DEFAULT:
      return self.build_default(directory, parent_name)
    self.launch_job.depends(*self.launch_dependencies)
    job_list = self.build_job_list(self.launch_job)
    child_parent_name = target_name(self.name, parent_name)
    paths = [job.build(directory, child_parent_name) for job in job_list]
    paths.extend(
      props.build(directory, child_parent_name) for props in self.properties
    )
    self._logger.info(
      'Built %s jobs (out of %s declared) and %s property files in %s.',
      len(job_list) - 1, len(self.jobs), len(self.properties), directory
    )
    return paths

  def build_default(self, directory, parent_name=None):
    """Write all declared jobs and property files, without prefix.

    :param directory: Output directory.
    :param parent_name: Ignored.

    Only valid for the workflow named `'default'`. Dependencies are still
    resolved, to catch undefined names.

    """
    if self.name != DEFAULT:
      raise HadoopDslError(
        'Cannot build workflow %r as default, only the %r workflow can be.',
        self.name, DEFAULT
      )
    paths = []
    for job in self.jobs:
      job.update_dependencies(self.scope)
      paths.append(job.build(directory))
    paths.extend(props.build(directory) for props in self.properties)
    self._logger.info(
      'Built %s jobs and %s property files in %s.',
      len(self.jobs), len(self.properties), directory
    )
    return paths

  def clone(self, workflow=None):
    """Copy this workflow.

    :param workflow: Workflow to copy into. Defaults to a new workflow with the
      same name and factory.

    Jobs are cloned and bound in a new scope (with the same enclosing scope),
    so that modifying the copy leaves the original untouched. Property files
    are not copied.

    """
    if workflow is None:
      workflow = Workflow(self.name, self.factory)
    workflow.launch_job = self.launch_job.clone()
    workflow.executes(*self.launch_dependencies)
    workflow.scope = self.scope.clone()
    workflow.scope.level = workflow.name
    workflow.scope.this_level.clear()
    for job in self.jobs:
      job_clone = job.clone()
      workflow.jobs.append(job_clone)
      workflow.scope.bind(job.name, job_clone)
    self._logger.debug('Cloned into %r.', workflow)
    return workflow
