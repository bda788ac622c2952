#!/usr/bin/env python
# encoding: utf-8

"""Job definition module."""

from .util import HadoopDslError, flatten, target_name, write_properties
import logging as lg
import os.path as osp


_logger = lg.getLogger(__name__)

HEADER = 'This file was generated by hadoopdsl. Do not edit by hand.'


def join_prefix(options, prefix, sep, formatter):
  """Helper to join options starting with a prefix into a string.

  :param options: Dictionary of options, modified in place.
  :param prefix: Option prefix.
  :param sep: Separator used to concatenate the string.
  :param formatter: String formatter. It is formatted using the tuple
    `(suffix, value)` where `suffix` is the part of `key` after `prefix`.

  Example: `{'jvm.args.foo': 1, 'jvm.args.bar': 2}` joined on `'jvm.args'`
  with formatter `'-D%s=%s'` becomes `{'jvm.args': '-Dbar=2 -Dfoo=1'}`.

  """
  prefix = '%s.' % (prefix.rstrip('.'), )
  opts = []
  for key in list(options):
    if key.startswith(prefix):
      opts.append((key[len(prefix):], options.pop(key)))
  if opts:
    options[prefix[:-1]] = sep.join(formatter % a for a in sorted(opts))


class Job(object):

  """Base Azkaban job.

  :param name: Name of the job, unique within its scope.
  :param options: tuple of dictionaries. The job's properties are built from
    this tuple by keeping the latest definition of each option. Nested
    dictionaries are flattened (combining keys with `'.'`).

  Dependencies are declared by name (see :meth:`depends`) and only resolved
  to jobs when the enclosing workflow is built (see
  :meth:`update_dependencies`).

  Subclasses set `job_type` (forced over any `'type'` property) and optionally
  `uses_key`, the property set by :meth:`uses`.

  """

  job_type = None
  uses_key = None

  def __init__(self, name, *options, **kwargs):
    self.name = name
    self.properties = {}
    self.dependency_names = []
    self.dependencies = []
    self.set(*options, **kwargs)

  def __repr__(self):
    return '<%s(name=%r)>' % (self.__class__.__name__, self.name)

  def set(self, *options, **kwargs):
    """Set job properties.

    :param options: Dictionaries of properties, flattened then merged.
    :param kwargs: Properties, keyword style. Underscores are kept as is.

    Returns the job itself, to allow chaining.

    """
    for option in options + (kwargs, ):
      self.properties.update(flatten(option))
    return self

  def uses(self, value):
    """Set the main property of this job type (e.g. its script or class)."""
    if not self.uses_key:
      raise HadoopDslError('Job %r has no `uses` property.', self.name)
    self.properties[self.uses_key] = value
    return self

  def depends(self, *names):
    """Declare dependencies by name.

    :param names: Job names, optionally qualified (e.g. `'flow.job'`).
      Duplicates are ignored, the order of first declaration is kept.

    """
    for name in names:
      if not name in self.dependency_names:
        self.dependency_names.append(name)
    return self

  def update_dependencies(self, scope):
    """Resolve dependency names against a scope.

    :param scope: :class:`~hadoopdsl.scope.NamedScope` instance.

    Any name not bound to a job is a fatal error. Names resolving to the same
    job yield a single dependency.

    """
    dependencies = []
    for name in self.dependency_names:
      job = scope.lookup(name)
      if not isinstance(job, Job):
        raise HadoopDslError(
          'Unresolved dependency %r of job %r in scope %r.',
          name, self.name, scope.level
        )
      if not any(job is dependency for dependency in dependencies):
        dependencies.append(job)
    self.dependencies = dependencies

  def target_name(self, parent_name=None):
    """Name of the job file (without extension)."""
    return target_name(self.name, parent_name)

  def build_properties(self, parent_name=None):
    """Properties written to the job file.

    :param parent_name: Prefix applied to the names of dependencies.

    """
    options = dict(self.properties)
    if self.job_type:
      options['type'] = self.job_type
    if self.dependency_names:
      if self.dependencies:
        names = [job.name for job in self.dependencies]
      else:
        names = self.dependency_names
      options['dependencies'] = ','.join(
        target_name(name, parent_name) for name in names
      )
    return options

  def build(self, directory, parent_name=None):
    """Write job file.

    :param directory: Directory where the file will be created. Any existing
      file will be overwritten.
    :param parent_name: Optional prefix, e.g. the enclosing workflow's name.

    """
    path = osp.join(directory, '%s.job' % (self.target_name(parent_name), ))
    write_properties(self.build_properties(parent_name), path, header=HEADER)
    _logger.debug('Built job %r as %s.', self.name, path)
    return path

  def clone(self):
    """Copy of this job.

    Properties and dependency names are copied, so that the copy can be
    modified independently. Resolved dependencies are not: the copy resolves
    its names again in the scope it is built in.

    """
    job = self.__class__(self.name)
    job.properties = dict(self.properties)
    job.dependency_names = list(self.dependency_names)
    return job


class CommandJob(Job):

  """Job running a shell command."""

  job_type = 'command'
  uses_key = 'command'


class _JvmJob(Job):

  """Job accepting JVM arguments as a nested dictionary.

  For example `{'jvm.args': {'foo': 1, 'bar': 2}}` is written as
  `jvm.args=-Dbar=2 -Dfoo=1`.

  """

  def build_properties(self, parent_name=None):
    options = super(_JvmJob, self).build_properties(parent_name)
    join_prefix(options, 'jvm.args', ' ', '-D%s=%s')
    return options


class HadoopJavaJob(_JvmJob):

  job_type = 'hadoopJava'
  uses_key = 'job.class'


class HiveJob(Job):

  job_type = 'hive'
  uses_key = 'hive.script'


class JavaJob(Job):

  job_type = 'java'
  uses_key = 'job.class'


class JavaProcessJob(_JvmJob):

  job_type = 'javaprocess'
  uses_key = 'java.class'


class KafkaPushJob(Job):

  job_type = 'KafkaPushJob'
  uses_key = 'input.path'


class NoOpJob(Job):

  job_type = 'noop'


class PigJob(_JvmJob):

  """Job running a pig script.

  Script parameters can be passed as a nested dictionary under `'param'`.

  """

  job_type = 'pig'
  uses_key = 'pig.script'


class VoldemortBuildPushJob(Job):

  job_type = 'VoldemortBuildandPush'
  uses_key = 'push.store.name'


class LaunchJob(NoOpJob):

  """Terminal job of a workflow.

  Its dependencies are the workflow's `executes` targets. Its file is named
  after the (qualified) workflow, which is the flow name Azkaban displays.

  """

  def target_name(self, parent_name=None):
    return parent_name or self.name
