#!/usr/bin/env python
# encoding: utf-8

"""Test hadoopdsl job module."""

from hadoopdsl.job import *
from hadoopdsl.properties import Properties
from hadoopdsl.scope import NamedScope
from hadoopdsl.util import HadoopDslError
from shutil import rmtree
from tempfile import mkdtemp
from testing_tools import read_properties
import os.path as osp
import pytest


class _TestBuild(object):

  def setup_method(self):
    self.directory = mkdtemp()

  def teardown_method(self):
    rmtree(self.directory)

  def read(self, fname):
    with open(osp.join(self.directory, fname)) as reader:
      return reader.read()


class TestJob(_TestBuild):

  def test_set_flattens(self):
    job = Job('foo', {'a': 1, 'b': {'c': 2, 'd': 3}})
    assert job.properties == {'a': 1, 'b.c': 2, 'b.d': 3}

  def test_init_with_keywords(self):
    job = Job('foo', {'a': 1}, b=2)
    assert job.properties == {'a': 1, 'b': 2}

  def test_set_with_defaults(self):
    defaults = {'b': {'d': 4}, 'e': 5}
    job = Job('foo', defaults, {'a': 1, 'b': {'c': 2, 'd': 3}})
    job.set(e=6)
    assert job.properties == {'a': 1, 'b.c': 2, 'b.d': 3, 'e': 6}

  def test_generate_simple(self):
    job = Job('foo', {'a': 1, 'b': {'c': 2, 'd': 3}})
    path = job.build(self.directory)
    assert path == osp.join(self.directory, 'foo.job')
    assert self.read('foo.job') == '# %s\na=1\nb.c=2\nb.d=3\n' % (HEADER, )

  def test_generate_with_parent_name(self):
    Job('foo', {'a': 1}).build(self.directory, 'bar-baz')
    assert read_properties(osp.join(self.directory, 'bar-baz-foo.job')) == {
      'a': '1',
    }

  def test_depends_deduplicates(self):
    job = Job('foo').depends('b', 'a').depends('b', 'c')
    assert job.dependency_names == ['b', 'a', 'c']

  def test_generate_with_dependencies(self):
    job = Job('foo', {'a': 2}).depends('bar', 'baz')
    job.build(self.directory, 'flow')
    assert read_properties(osp.join(self.directory, 'flow-foo.job')) == {
      'a': '2',
      'dependencies': 'flow-bar,flow-baz',
    }

  def test_update_dependencies(self):
    scope = NamedScope('flow')
    bar = Job('bar')
    scope.bind('bar', bar)
    job = Job('foo').depends('bar')
    job.update_dependencies(scope)
    assert job.dependencies == [bar]

  def test_update_dependencies_aliases(self):
    scope = NamedScope('flow')
    bar = Job('bar')
    scope.bind('bar', bar)
    scope.bind('other_bar', bar)
    job = Job('foo').depends('bar', 'other_bar')
    job.update_dependencies(scope)
    assert job.dependencies == [bar]
    assert job.build_properties()['dependencies'] == 'bar'

  def test_update_missing_dependency(self):
    scope = NamedScope('flow')
    scope.bind('bar', Job('bar'))
    job = Job('foo').depends('bar', 'baz')
    with pytest.raises(HadoopDslError) as excinfo:
      job.update_dependencies(scope)
    assert "'baz'" in str(excinfo.value)

  def test_update_dependency_not_a_job(self):
    scope = NamedScope('flow')
    scope.bind('bar', Properties('bar'))
    job = Job('foo').depends('bar')
    with pytest.raises(HadoopDslError):
      job.update_dependencies(scope)

  def test_qualified_dependency_uses_job_name(self):
    scope = NamedScope('flow')
    scope.bind('bar', Job('bar'))
    job = Job('foo').depends('flow_bar')
    scope.bind('flow_bar', scope.lookup('bar'))
    job.update_dependencies(scope)
    assert job.build_properties('p')['dependencies'] == 'p-bar'

  def test_clone(self):
    job = CommandJob('foo', {'a': 1}).depends('bar')
    clone = job.clone()
    assert isinstance(clone, CommandJob)
    assert clone is not job
    assert clone.name == 'foo'
    clone.set(a=2)
    clone.depends('baz')
    assert job.properties == {'a': 1}
    assert job.dependency_names == ['bar']

  def test_clone_drops_resolved_dependencies(self):
    scope = NamedScope('flow')
    scope.bind('bar', Job('bar'))
    job = Job('foo').depends('bar')
    job.update_dependencies(scope)
    clone = job.clone()
    assert clone.dependency_names == ['bar']
    assert clone.dependencies == []

  def test_generic_job_keeps_type(self):
    job = Job('foo', {'type': 'custom'})
    assert job.build_properties()['type'] == 'custom'

  def test_uses_without_key(self):
    with pytest.raises(HadoopDslError):
      NoOpJob('foo').uses('bar')


class TestJobTypes(object):

  @pytest.mark.parametrize('cls,job_type,key', [
    (CommandJob, 'command', 'command'),
    (HadoopJavaJob, 'hadoopJava', 'job.class'),
    (HiveJob, 'hive', 'hive.script'),
    (JavaJob, 'java', 'job.class'),
    (JavaProcessJob, 'javaprocess', 'java.class'),
    (KafkaPushJob, 'KafkaPushJob', 'input.path'),
    (PigJob, 'pig', 'pig.script'),
    (VoldemortBuildPushJob, 'VoldemortBuildandPush', 'push.store.name'),
  ])
  def test_type_and_uses(self, cls, job_type, key):
    job = cls('foo', {'type': 'other'}).uses('bar')
    assert job.build_properties() == {'type': job_type, key: 'bar'}

  def test_no_op(self):
    assert NoOpJob('foo').build_properties() == {'type': 'noop'}

  def test_jvm_args(self):
    job = PigJob('foo', {'jvm.args': {'foo': 48, 'bar': 23}})
    assert job.build_properties() == {
      'type': 'pig',
      'jvm.args': '-Dbar=23 -Dfoo=48',
    }
    assert job.properties == {'jvm.args.bar': 23, 'jvm.args.foo': 48}


class TestLaunchJob(_TestBuild):

  def test_named_after_parent(self):
    job = LaunchJob('flow').depends('foo', 'bar')
    path = job.build(self.directory, 'root-flow')
    assert osp.basename(path) == 'root-flow.job'
    assert read_properties(path) == {
      'type': 'noop',
      'dependencies': 'root-flow-foo,root-flow-bar',
    }

  def test_named_after_itself_without_parent(self):
    assert LaunchJob('flow').target_name() == 'flow'

  def test_clone(self):
    job = LaunchJob('flow').depends('foo')
    clone = job.clone()
    assert isinstance(clone, LaunchJob)
    assert clone.dependency_names == ['foo']


class TestJoin(object):

  def test_join_prefix(self):
    options = {'bar.a': 1, 'bar.b.c': 'foo', 'barn': 2}
    join_prefix(options, 'bar', ',', '%s-%s')
    assert options == {'bar': 'a-1,b.c-foo', 'barn': 2}
