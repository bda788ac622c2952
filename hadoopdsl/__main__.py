#!/usr/bin/env python
# encoding: utf-8

"""Hadoop DSL CLI: build Azkaban workflows declared in python.

Usage:
  hadoopdsl build [-c] [-d DSL] [PATH]
  hadoopdsl info [-d DSL] [WORKFLOW]
  hadoopdsl -h | --help | -l | --log | -v | --version

Commands:
  build                         Write the job and property files of all
                                declared workflows.
  info                          View declared workflows, or the jobs run by a
                                workflow (in build order) along with their
                                dependencies.

Arguments:
  PATH                          Build directory. Defaults to the configuration's
                                build path if any, else to the
                                `default.build_path` option of the `hadoopdsl`
                                section of `~/.hadoopdslrc` (itself defaulting
                                to `jobs`).
  WORKFLOW                      Workflow name.

Options:
  -c --clean                    Remove existing job and property files from
                                the build directory before building.
  -d DSL --dsl=DSL              Path to a python module defining a
                                `hadoopdsl.HadoopDsl` instance. If multiple
                                instances are registered, you can disambiguate
                                as follows: `--dsl=module:name`. Defaults to
                                the `default.dsl` option (itself defaulting to
                                `jobs`).
  -h --help                     Show this message and exit.
  -l --log                      Show path to current log file and exit.
  -v --version                  Show version and exit.

Hadoop DSL CLI returns with exit code 1 if an error occurred and 0 otherwise.

"""

from hadoopdsl import __version__, CLI_ARGS
from hadoopdsl.dsl import HadoopDsl
from hadoopdsl.util import Config, HadoopDslError, catch
from hadoopdsl.workflow import DEFAULT, Workflow
from docopt import docopt
from traceback import format_exc
import logging as lg
import os
import sys


_logger = lg.getLogger(__name__)


def _forward(args, names):
  """Forward subset of arguments from initial dictionary.

  :param args: Dictionary of parsed arguments (output of `docopt.docopt`).
  :param names: List of names that will be included.

  """
  names = set(names)
  return dict(
    ('_%s' % (k.lower().lstrip('-').replace('-', '_'), ), v)
    for (k, v) in args.items() if k in names
  )

def _load_dsl(_dsl):
  """Resolve configuration from CLI argument.

  :param _dsl: `--dsl` argument.

  If at least one `':'` is found, the rightmost one separates the path to the
  module from the configuration name. Otherwise the module must register
  exactly one configuration.

  """
  _dsl = _dsl or Config().get_option('hadoopdsl', 'default.dsl', 'jobs')
  if ':' in _dsl:
    path, name = _dsl.rsplit(':', 1)
  else:
    path, name = _dsl, None
  try:
    dsls = HadoopDsl.load(path, new=True)
  except ImportError:
    raise HadoopDslError(
      'Unable to load configuration module %r.\n'
      'You can specify another location using the `--dsl` option.\n\n%s',
      path, format_exc()
    )
  if name:
    if not name in dsls:
      raise HadoopDslError(
        'Configuration %r not found in %r. Available configurations: %s',
        name, path, ', '.join(dsls)
      )
    return dsls[name]
  if not dsls:
    raise HadoopDslError('No registered configuration found in %r.', path)
  if len(dsls) > 1:
    raise HadoopDslError(
      'Multiple registered configurations found: %s\n'
      'You can use the `--dsl` option to disambiguate.',
      ', '.join(dsls)
    )
  return dsls.popitem()[1]

def view_info(dsl, _workflow):
  """List workflows, or jobs in a workflow."""
  if _workflow:
    workflow = dsl.lookup_ref(_workflow)
    if not isinstance(workflow, Workflow):
      raise HadoopDslError('Workflow %r not found.', _workflow)
    if workflow.name == DEFAULT:
      jobs = workflow.jobs
    else:
      workflow.launch_job.depends(*workflow.launch_dependencies)
      jobs = workflow.build_job_list(workflow.launch_job)[1:]
    for job in jobs:
      sys.stdout.write(
        '%s\t%s\n' % (job.name, ','.join(job.dependency_names))
      )
  else:
    for workflow in dsl.workflows:
      sys.stdout.write(
        '%s\t%s\n' % (workflow.name, ','.join(workflow.launch_dependencies))
      )

def build_dsl(dsl, _path, _clean):
  """Build configuration."""
  paths = dsl.build(_path, clean=_clean or None)
  sys.stdout.write(
    'Configuration %s successfully built (%s files written).\n'
    % (dsl, len(paths))
  )

@catch(HadoopDslError)
def main(argv=None):
  """Entry point."""
  # enable general logging
  logger = lg.getLogger()
  logger.setLevel(lg.DEBUG)
  handler = Config().get_file_handler('hadoopdsl')
  if handler:
    logger.addHandler(handler)
  # parse arguments
  argv = argv or sys.argv[1:]
  _logger.debug('Running command %r from %r.', ' '.join(argv), os.getcwd())
  args = docopt(__doc__, argv=argv, version=__version__)
  CLI_ARGS.update(args)
  # do things
  if args['--log']:
    if handler:
      sys.stdout.write('%s\n' % (handler.baseFilename, ))
    else:
      raise HadoopDslError('No log file active.')
  elif args['build']:
    build_dsl(_load_dsl(args['--dsl']), **_forward(args, ['PATH', '--clean']))
  elif args['info']:
    view_info(_load_dsl(args['--dsl']), **_forward(args, ['WORKFLOW']))

if __name__ == '__main__':
  main()
