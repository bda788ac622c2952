#!/usr/bin/env python
# encoding: utf-8

"""Hadoop DSL example reusing jobs and workflows.

Global jobs are templates: they are only built once added to a workflow. The
test workflow is an exact copy of the production one, with its own job
instances (and without its property files).

"""

from hadoopdsl import HadoopDsl


DSL = HadoopDsl('templates')

DSL.hive_job('hive_template', lambda job, scope: job.set({
  'retries': 2,
  'hive.conf': {'mapred.job.queue.name': 'default'},
}))


def production(workflow, scope):
  workflow.add_job('hive_template', 'extract', lambda job, scope: job
    .uses('extract.q')
  )
  workflow.add_job('hive_template', 'aggregate', lambda job, scope: job
    .uses('aggregate.q')
    .depends('extract')
  )
  workflow.no_op_job('done', lambda job, scope: job.depends('aggregate'))
  workflow.executes('done')

DSL.workflow('production', production)
DSL.add_workflow('production', 'test', lambda workflow, scope: workflow
  .lookup('extract')
  .set(retries=0)
)

# jobs of the default workflow are built as is, without any prefix
DSL.workflow('default', lambda workflow, scope: workflow.command_job(
  'cleanup', lambda job, scope: job.uses('hdfs dfs -rm -r /tmp/sample')
))
