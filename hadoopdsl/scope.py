#!/usr/bin/env python
# encoding: utf-8

"""Named scope module.

Scopes map names to the objects declared in them (jobs, property files,
workflows) and are chained to an enclosing scope. Names can be qualified with
dots to reach inside scope-bearing objects, e.g. `'my_flow.my_job'`.

"""

import re


_SEGMENT_P = re.compile(r'[^\s.]+')


class NamedScopeContainer(object):

  """Mixin for objects exposing a nested scope.

  Subclasses must set a `scope` attribute to a :class:`NamedScope` instance.

  """

  scope = None


class NamedScope(object):

  """Chained lookup table.

  :param level: Name of this level (used for display only).
  :param next_level: Enclosing scope. This is a plain back-reference, the
    enclosing scope is never owned by its children.

  """

  def __init__(self, level, next_level=None):
    self.level = level
    self.next_level = next_level
    self.this_level = {}

  def __repr__(self):
    return '<%s(level=%r, next_level=%r)>' % (
      self.__class__.__name__,
      self.level,
      self.next_level.level if self.next_level else None,
    )

  def __contains__(self, name):
    return name in self.this_level

  def bind(self, name, obj):
    """Bind a name at this level.

    :param name: Name.
    :param obj: Object bound. Any object previously bound under the same name
      at this level is replaced.

    """
    self.this_level[name] = obj

  def lookup(self, path):
    """Resolve a (possibly qualified) name.

    :param path: Dot-separated sequence of names.

    Returns `None` if the path is malformed (empty segments, whitespace) or
    if any of its segments can't be resolved. This method never raises.

    """
    if not isinstance(path, str):
      return None
    segments = path.split('.')
    if not all(_SEGMENT_P.fullmatch(segment) for segment in segments):
      return None
    obj = self._resolve(segments[0])
    for segment in segments[1:]:
      if not isinstance(obj, NamedScopeContainer) or obj.scope is None:
        return None
      obj = obj.scope._resolve(segment)
    return obj

  def clone(self):
    """Copy of this scope, with the same enclosing scope.

    Bindings are copied into a new dictionary, callers are free to clear it.

    """
    scope = NamedScope(self.level, self.next_level)
    scope.this_level = dict(self.this_level)
    return scope

  def _resolve(self, name):
    """Find name at this level, else walk up the enclosing scopes."""
    scope = self
    while scope is not None:
      if name in scope.this_level:
        return scope.this_level[name]
      scope = scope.next_level
    return None
