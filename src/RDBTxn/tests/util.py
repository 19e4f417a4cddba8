##############################################################################
#
# Copyright (c) 2024 Zope Foundation and Contributors.
# All Rights Reserved.
#
# This software is subject to the provisions of the Zope Public License,
# Version 2.1 (ZPL).  A copy of the ZPL should accompany this distribution.
# THIS SOFTWARE IS PROVIDED "AS IS" AND ANY AND ALL EXPRESS OR IMPLIED
# WARRANTIES ARE DISCLAIMED, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED
# WARRANTIES OF TITLE, MERCHANTABILITY, AGAINST INFRINGEMENT, AND FITNESS
# FOR A PARTICULAR PURPOSE.
#
##############################################################################
"""Fake connections and test-case support
"""
import os
import tempfile
import unittest

import zope.testing.setupstack
from zope.interface import implementer

from RDBTxn.interfaces import IConnection
from RDBTxn.isolation import IsolationLevel


class DriverError(Exception):
    """Stands in for the errors a database driver raises."""


@implementer(IConnection)
class FakeConnection:
    """Records every call made on it.

    Pass the names of methods that should raise DriverError as fail.
    """

    def __init__(self, isolation=IsolationLevel.READ_COMMITTED.level,
                 autocommit=True, fail=()):
        self.isolation = isolation
        self.autocommit = autocommit
        self.closed = False
        self.fail = set(fail)
        self.calls = []

    def _called(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.fail:
            raise DriverError(name)

    def count(self, name, *args):
        return self.calls.count((name,) + args)

    def getIsolationLevel(self):
        self._called('getIsolationLevel')
        return self.isolation

    def setIsolationLevel(self, level):
        self._called('setIsolationLevel', level)
        self.isolation = level

    def getAutoCommit(self):
        self._called('getAutoCommit')
        return self.autocommit

    def setAutoCommit(self, autocommit):
        self._called('setAutoCommit', autocommit)
        self.autocommit = autocommit

    def commit(self):
        self._called('commit')

    def rollback(self):
        self._called('rollback')

    def close(self):
        self._called('close')
        self.closed = True

    def isClosed(self):
        self._called('isClosed')
        return self.closed


class FakeConnector:
    """A connector handing out FakeConnections.

    The connections made so far are kept in ``connections``.  If error
    is set, calling the connector raises it instead.
    """

    def __init__(self, **options):
        self.options = options
        self.connections = []
        self.error = None

    def __call__(self):
        if self.error is not None:
            raise self.error
        conn = FakeConnection(**self.options)
        self.connections.append(conn)
        return conn

    @property
    def last(self):
        return self.connections[-1]


def setUp(test, name='test'):
    d = tempfile.mkdtemp(prefix=name)
    zope.testing.setupstack.register(test, zope.testing.setupstack.rmtree, d)
    zope.testing.setupstack.register(test, os.chdir, os.getcwd())
    os.chdir(d)


def tearDown(test):
    zope.testing.setupstack.tearDown(test)


class TestCase(unittest.TestCase):
    """Runs each test in a fresh temporary directory."""

    def setUp(self):
        setUp(self, self.__class__.__name__)

    tearDown = tearDown
