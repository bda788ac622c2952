#!/usr/bin/env python
# encoding: utf-8

"""Factory for the DSL's jobs and property files.

Workflows never instantiate job classes directly, they go through a factory.
Subclass :class:`Factory` to substitute custom job types (e.g. with
organization specific defaults).

"""

from .job import (CommandJob, HadoopJavaJob, HiveJob, Job, JavaJob,
  JavaProcessJob, KafkaPushJob, LaunchJob, NoOpJob, PigJob,
  VoldemortBuildPushJob)
from .properties import Properties


class Factory(object):

  """Default factory."""

  def make_azkaban_job(self, name):
    return Job(name)

  def make_command_job(self, name):
    return CommandJob(name)

  def make_hadoop_java_job(self, name):
    return HadoopJavaJob(name)

  def make_hive_job(self, name):
    return HiveJob(name)

  def make_java_job(self, name):
    return JavaJob(name)

  def make_java_process_job(self, name):
    return JavaProcessJob(name)

  def make_kafka_push_job(self, name):
    return KafkaPushJob(name)

  def make_launch_job(self, name):
    return LaunchJob(name)

  def make_no_op_job(self, name):
    return NoOpJob(name)

  def make_pig_job(self, name):
    return PigJob(name)

  def make_voldemort_build_push_job(self, name):
    return VoldemortBuildPushJob(name)

  def make_properties(self, name):
    return Properties(name)
