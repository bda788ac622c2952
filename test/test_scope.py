#!/usr/bin/env python
# encoding: utf-8

"""Test hadoopdsl scope module."""

from hadoopdsl.scope import *
import pytest


class _Container(NamedScopeContainer):

  def __init__(self, name, next_level=None):
    self.scope = NamedScope(name, next_level)


class TestNamedScope(object):

  def setup_method(self):
    self.scope = NamedScope('global')
    self.container = _Container('a', self.scope)
    self.scope.bind('a', self.container)
    self.obj = object()
    self.container.scope.bind('a', self.obj)

  def test_bind(self):
    self.scope.bind('b', 1)
    assert 'b' in self.scope
    assert self.scope.lookup('b') == 1

  def test_bind_overwrites(self):
    self.scope.bind('b', 1)
    self.scope.bind('b', 2)
    assert self.scope.lookup('b') == 2

  def test_lookup(self):
    assert self.scope.lookup('a') is self.container

  def test_lookup_qualified(self):
    assert self.scope.lookup('a.a') is self.obj

  @pytest.mark.parametrize('path', ['b', 'a.b', 'a.b.c', 'a.a.a'])
  def test_lookup_unbound(self, path):
    assert self.scope.lookup(path) is None

  @pytest.mark.parametrize('path', [
    '', '.', '. ', ' .', 'a.', '..', 'a..', '.a.', '.a.b.', '.a.a .', '..a.',
    '.a..', 'a .a', ' a', 'a.a ', 'a\t',
  ])
  def test_lookup_malformed(self, path):
    assert self.scope.lookup(path) is None

  @pytest.mark.parametrize('path', [None, 1, ['a']])
  def test_lookup_not_a_string(self, path):
    assert self.scope.lookup(path) is None

  def test_lookup_walks_up(self):
    self.scope.bind('b', 2)
    assert self.container.scope.lookup('b') == 2

  def test_lookup_prefers_current_level(self):
    self.scope.bind('b', 2)
    self.container.scope.bind('b', 3)
    assert self.container.scope.lookup('b') == 3
    assert self.scope.lookup('b') == 2

  def test_lookup_never_sideways(self):
    other = _Container('c', self.scope)
    other.scope.bind('d', 4)
    self.scope.bind('c', other)
    assert self.container.scope.lookup('d') is None
    assert self.container.scope.lookup('c.d') == 4

  def test_lookup_nested_walks_up_from_nested_scope(self):
    self.scope.bind('b', 2)
    assert self.scope.lookup('a.b') == 2

  def test_lookup_through_non_container(self):
    self.scope.bind('b', 2)
    assert self.scope.lookup('b.a') is None

  def test_clone(self):
    clone = self.container.scope.clone()
    assert clone is not self.container.scope
    assert clone.next_level is self.scope
    assert clone.lookup('a') is self.obj
    clone.this_level.clear()
    assert self.container.scope.lookup('a') is self.obj
    assert clone.lookup('a') is self.container
