#!/usr/bin/env python
# encoding: utf-8

"""DSL methods shared by the top-level configuration and workflows.

Every declaration method takes an optional `configure` callable. It is called
with the newly created entity and the enclosing scope, right after
construction and before the entity is registered::

  def configure(job, scope):
    job.uses('echo hello').depends('first')

  workflow.command_job('second', configure)

"""

from .job import Job
from .properties import Properties
from .util import HadoopDslError


def clone_job(name, scope, rename=None):
  """Clone a job found in scope.

  :param name: Name (optionally qualified) of the job to clone.
  :param scope: :class:`~hadoopdsl.scope.NamedScope` searched.
  :param rename: Optional name for the clone.

  """
  job = scope.lookup(name)
  if not isinstance(job, Job):
    raise HadoopDslError('Could not find job %r in call to add_job.', name)
  job = job.clone()
  if rename:
    job.name = rename
  return job

def clone_property_file(name, scope, rename=None):
  """Clone a property file found in scope (cf. :func:`clone_job`)."""
  props = scope.lookup(name)
  if not isinstance(props, Properties):
    raise HadoopDslError(
      'Could not find property file %r in call to add_property_file.', name
    )
  props = props.clone()
  if rename:
    props.name = rename
  return props


class DslMethods(object):

  """Declaration methods.

  Classes using this mixin must provide `scope`, `factory`, `jobs`,
  `properties` and `_logger` attributes.

  """

  def configure_job(self, job, configure=None):
    """Configure a job, then register and bind it in this scope.

    Can be used to declare jobs of custom types.

    """
    if configure:
      configure(job, self.scope)
    self.jobs.append(job)
    self.scope.bind(job.name, job)
    self._logger.info('Added job %r.', job.name)
    return job

  def configure_properties(self, props, configure=None):
    """Configure a property file, then register and bind it in this scope."""
    if configure:
      configure(props, self.scope)
    self.properties.append(props)
    self.scope.bind(props.name, props)
    self._logger.info('Added property file %r.', props.name)
    return props

  def lookup(self, name, configure=None):
    """Find an object by (optionally qualified) name.

    :param name: Name to look up.
    :param configure: If specified, called with the object found and this
      scope. In this case, not finding the object is an error.

    Without `configure`, returns `None` when nothing is found.

    """
    obj = self.scope.lookup(name)
    if configure:
      if obj is None:
        raise HadoopDslError('Could not find %r in call to lookup.', name)
      configure(obj, self.scope)
    return obj

  def add_job(self, name, rename=None, configure=None):
    """Declare a copy of an existing job, optionally renamed."""
    return self.configure_job(clone_job(name, self.scope, rename), configure)

  def add_property_file(self, name, rename=None, configure=None):
    """Declare a copy of an existing property file, optionally renamed."""
    return self.configure_properties(
      clone_property_file(name, self.scope, rename), configure
    )

  def job(self, name, configure=None):
    return self.configure_job(self.factory.make_azkaban_job(name), configure)

  def command_job(self, name, configure=None):
    return self.configure_job(self.factory.make_command_job(name), configure)

  def hadoop_java_job(self, name, configure=None):
    return self.configure_job(
      self.factory.make_hadoop_java_job(name), configure
    )

  def hive_job(self, name, configure=None):
    return self.configure_job(self.factory.make_hive_job(name), configure)

  def java_job(self, name, configure=None):
    return self.configure_job(self.factory.make_java_job(name), configure)

  def java_process_job(self, name, configure=None):
    return self.configure_job(
      self.factory.make_java_process_job(name), configure
    )

  def kafka_push_job(self, name, configure=None):
    return self.configure_job(
      self.factory.make_kafka_push_job(name), configure
    )

  def no_op_job(self, name, configure=None):
    return self.configure_job(self.factory.make_no_op_job(name), configure)

  def pig_job(self, name, configure=None):
    return self.configure_job(self.factory.make_pig_job(name), configure)

  def voldemort_build_push_job(self, name, configure=None):
    return self.configure_job(
      self.factory.make_voldemort_build_push_job(name), configure
    )

  def property_file(self, name, configure=None):
    return self.configure_properties(
      self.factory.make_properties(name), configure
    )
