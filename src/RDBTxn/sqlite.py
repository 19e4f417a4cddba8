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
"""IConnection adapter for the sqlite3 module.

SQLite knows two isolation behaviours: the default, where a
transaction sees only committed data (SERIALIZABLE), and dirty reads
between connections sharing a cache, switched on with the
``read_uncommitted`` pragma (READ_UNCOMMITTED).  Every other level is
reported as, and set to, SERIALIZABLE.

Autocommit follows the sqlite3 module's own switch: a connection whose
``isolation_level`` is None runs each statement on its own.  Turning
autocommit back on rolls back anything not yet committed, so closing a
transaction that was never committed loses its work.
"""
import sqlite3

from zope.interface import implementer

from RDBTxn.interfaces import IConnection
from RDBTxn.isolation import IsolationLevel


@implementer(IConnection)
class SQLiteConnection:

    def __init__(self, raw, begin_mode='DEFERRED'):
        self.raw = raw
        # The BEGIN flavour used when autocommit is turned off.
        self.begin_mode = begin_mode
        self._closed = False

    def __repr__(self):
        return '<%s %r>' % (self.__class__.__name__, self.raw)

    def getIsolationLevel(self):
        row = self.raw.execute('PRAGMA read_uncommitted').fetchone()
        if row[0]:
            return IsolationLevel.READ_UNCOMMITTED.level
        return IsolationLevel.SERIALIZABLE.level

    def setIsolationLevel(self, level):
        if level == IsolationLevel.READ_UNCOMMITTED.level:
            self.raw.execute('PRAGMA read_uncommitted = 1')
        else:
            self.raw.execute('PRAGMA read_uncommitted = 0')

    def getAutoCommit(self):
        return self.raw.isolation_level is None

    def setAutoCommit(self, autocommit):
        if autocommit:
            # sqlite3 commits pending work when autocommit is switched
            # on.  Work that wasn't committed explicitly is discarded.
            if self.raw.in_transaction:
                self.raw.rollback()
            self.raw.isolation_level = None
        else:
            self.raw.isolation_level = self.begin_mode

    def commit(self):
        self.raw.commit()

    def rollback(self):
        self.raw.rollback()

    def close(self):
        if not self._closed:
            self.raw.close()
            self._closed = True

    def isClosed(self):
        return self._closed

    def cursor(self):
        return self.raw.cursor()

    def execute(self, sql, parameters=()):
        return self.raw.execute(sql, parameters)


def connect(database, **kw):
    """Open an SQLite database and return it as an IConnection.

    Keyword arguments other than ``begin_mode`` are passed to
    sqlite3.connect().  The connection starts in autocommit mode.
    """
    begin_mode = kw.pop('begin_mode', 'DEFERRED')
    kw['isolation_level'] = None
    return SQLiteConnection(sqlite3.connect(database, **kw), begin_mode)
