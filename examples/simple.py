#!/usr/bin/env python
# encoding: utf-8

"""Hadoop DSL sample configuration script.

Build it with `hadoopdsl build -d examples/simple.py`. Only the jobs required
by `count_by_country` are written, prefixed by the workflow name.

"""

from hadoopdsl import HadoopDsl
from getpass import getuser


DSL = HadoopDsl('sample', build_path='jobs')

# properties shared by all jobs of the workflow
DSL.property_file('common', lambda props, scope: props.set({
  'user.to.proxy': getuser(),
  'hdfs.root': '/jobs/sample/',
}))


def configure(workflow, scope):
  workflow.add_property_file('common')
  workflow.hadoop_java_job('gather_data', lambda job, scope: job
    .uses('sample.GatherData')
    .set({'path.output': '${hdfs.root}data.avro', 'jvm.args': {'xmx': '2g'}})
  )
  workflow.pig_job('count_by_country', lambda job, scope: job
    .uses('count_by_country.pig')
    .set(param={'input': '${hdfs.root}data.avro'})
    .depends('gather_data')
  )
  workflow.command_job('unused', lambda job, scope: job.uses('echo unused'))
  workflow.executes('count_by_country')

DSL.workflow('sample_flow', configure)
