#!/usr/bin/env python
# encoding: utf-8

"""Top-level configuration module."""

from weakref import WeakValueDictionary
from .factory import Factory
from .methods import DslMethods
from .scope import NamedScope, NamedScopeContainer
from .util import Adapter, Config, HadoopDslError
from .workflow import Workflow
import logging as lg
import os
import os.path as osp
import sys


_logger = lg.getLogger(__name__)


class HadoopDsl(NamedScopeContainer, DslMethods):

  """Collection of workflows, along with global jobs and property files.

  :param name: Name of the configuration, used as key in the registry.
  :param factory: :class:`~hadoopdsl.factory.Factory` used to create jobs and
    property files (it is shared with all workflows).
  :param register: Add instance to registry. Setting this to `False` will make
    it invisible to the CLI.
  :param build_path: Default directory where files are built. If unspecified,
    the `default.build_path` configuration option is used (itself defaulting
    to `jobs`).
  :param clean: Remove previously generated files from the build directory
    before building. Defaults to the `default.clean` configuration option.

  Global jobs are never built themselves: they serve as templates, added to
  workflows via :meth:`~hadoopdsl.methods.DslMethods.add_job`. Global property
  files are built without prefix.

  """

  _registry = WeakValueDictionary()

  def __init__(self, name='hadoop', factory=None, register=True,
    build_path=None, clean=None):
    self.name = name
    self.factory = factory or Factory()
    self.build_path = build_path
    self.clean = clean
    self.scope = NamedScope(name)
    self.workflows = []
    self.jobs = []
    self.properties = []
    if register:
      self._registry[name] = self
    self._logger = Adapter(repr(self), _logger)
    self._logger.debug('Instantiated.')

  def __repr__(self):
    return '<%s(name=%r)>' % (self.__class__.__name__, self.name)

  def __str__(self):
    return self.name

  def configure_workflow(self, workflow, configure=None):
    """Configure a workflow, then register and bind it in the global scope."""
    if configure:
      configure(workflow, self.scope)
    self.workflows.append(workflow)
    self.scope.bind(workflow.name, workflow)
    self._logger.info('Added workflow %r.', workflow.name)
    return workflow

  def workflow(self, name, configure=None):
    """Declare a workflow.

    :param name: Workflow name. The name `'default'` is reserved for a
      workflow whose jobs are all built, without launch job or prefix.
    :param configure: Optional callable, see :mod:`hadoopdsl.methods`.

    """
    return self.configure_workflow(
      Workflow(name, self.factory, self.scope), configure
    )

  def add_workflow(self, name, rename=None, configure=None):
    """Declare a copy of an existing workflow, optionally renamed.

    Note that the copy doesn't include the original's property files.

    """
    workflow = self.scope.lookup(name)
    if not isinstance(workflow, Workflow):
      raise HadoopDslError(
        'Could not find workflow %r in call to add_workflow.', name
      )
    target = Workflow(rename or workflow.name, self.factory, self.scope)
    return self.configure_workflow(workflow.clone(target), configure)

  def lookup_ref(self, path):
    """Find an object by qualified name (e.g. `'flow.job'`).

    :param path: Dot-separated name.

    Returns `None` if the name is malformed or unbound, never raises.

    """
    return self.scope.lookup(path)

  def build(self, path=None, clean=None):
    """Write all workflows' files.

    :param path: Build directory, created if necessary.
    :param clean: Remove existing job and property files from the build
      directory first.

    Returns the list of paths written.

    """
    if not (self.workflows or self.properties):
      raise HadoopDslError('Building empty configuration.')
    config = None
    if not path:
      path = self.build_path
    if not path:
      config = config or Config()
      path = config.get_option('hadoopdsl', 'default.build_path', 'jobs')
    if clean is None:
      clean = self.clean
    if clean is None:
      config = config or Config()
      clean = config.get_boolean_option('hadoopdsl', 'default.clean')
    self._logger.debug('Building in %s.', path)
    if osp.exists(path):
      if not osp.isdir(path):
        raise HadoopDslError('Build path %r is not a directory.', path)
      if clean:
        self._clean(path)
    else:
      os.makedirs(path)
    paths = []
    for workflow in self.workflows:
      paths.extend(workflow.build(path))
    paths.extend(props.build(path) for props in self.properties)
    self._logger.info('Built %s files in %s.', len(paths), path)
    return paths

  def _clean(self, path):
    """Remove generated files from a directory."""
    for fname in os.listdir(path):
      fpath = osp.join(path, fname)
      if fname.endswith(('.job', '.properties')) and osp.isfile(fpath):
        os.remove(fpath)
        self._logger.debug('Removed %s.', fpath)

  @classmethod
  def load(cls, path, new=False):
    """Load configurations from script.

    :param path: Path to python module.
    :param new: If set to `True`, only configurations loaded as a consequence
      of calling this method will be returned.

    Returns a dictionary of :class:`HadoopDsl` instances keyed by name. Only
    registered instances (i.e. instantiated with `register=True`) can be
    discovered via this method.

    """
    if not path:
      raise ImportError('Invalid configuration module path: %r' % (path, ))
    path = osp.abspath(path)
    _logger.debug('Attempting to load configurations from: %r', path)
    head, tail = osp.split(path.rstrip(os.sep))
    sys.path.insert(0, head)
    _registry = cls._registry
    cls._registry = {}
    # reset the registry to find out exactly which configurations are loaded,
    # even if there are name clashes
    try:
      __import__(osp.splitext(tail)[0])
      _logger.debug(
        'Found %s configurations from loading %s: %s',
        len(cls._registry), path, ', '.join(cls._registry),
      )
      collisions = set(cls._registry) & set(_registry)
      if collisions:
        _logger.warning(
          '%s configuration name collisions detected by loading %s: %s',
          len(collisions), path, ', '.join(collisions)
        )
      registry = cls._registry.copy()
    finally:
      loaded = cls._registry
      cls._registry = _registry
      for name, dsl in loaded.items():
        cls._registry[name] = dsl
        # keep the latest definition of each name
    if new:
      return registry
    else:
      return dict(cls._registry)
