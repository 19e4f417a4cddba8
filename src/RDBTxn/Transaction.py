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
"""Transactions bound to a single execution context.

A Transaction acquires its connection lazily.  Until the connection
attribute is read, nothing touches the database, and commit() and
rollback() have nothing to do.  The first read acquires a connection
from the manager and prepares it:

  1. If an isolation level was requested and the connection isn't
     already using it, the level is changed.

  2. If the connection is in autocommit mode, autocommit is turned
     off.  Transactions are always explicit.

close() undoes both changes, closes the connection and unregisters the
transaction from its manager.  The undo steps and the close itself are
best-effort: their errors are discarded, because close() usually runs
while the caller is handling a more interesting error.  If preparing
the connection fails, the same cleanup runs before the error is
raised, so a half-prepared connection is never handed out.
"""
import logging

from zope.interface import implementer

from RDBTxn.Exceptions import TransactionClosedError
from RDBTxn.interfaces import ITransaction
from RDBTxn.utils import silently


logger = logging.getLogger('RDBTxn.Transaction')


class Status:
    # UNINITIALIZED is the initial state: no connection acquired yet.
    UNINITIALIZED = "Uninitialized"

    INITIALIZED = "Initialized"

    # Terminal.  Reached by close() or by a failure while preparing
    # the connection.
    CLOSED = "Closed"


@implementer(ITransaction)
class Transaction:

    # Session settings seen before we changed anything.  None until the
    # connection is acquired.
    originIsolation = None
    originAutoCommit = None

    # Whether the acquisition protocol set the isolation level or
    # turned autocommit off, and so has something to undo.
    _isolationChanged = False
    _autoCommitChanged = False

    _connection = None

    def __init__(self, manager, context, isolation=None):
        self.status = Status.UNINITIALIZED
        self.manager = manager
        self.context = context
        self.desiredIsolation = isolation
        logger.debug("new transaction for %r", context)

    def __repr__(self):
        return '<%s for %r, %s>' % (
            self.__class__.__name__, self.context, self.status)

    @property
    def connection(self):
        if self.status is Status.INITIALIZED:
            return self._connection
        if self.status is Status.CLOSED:
            raise TransactionClosedError(
                "The transaction for %r is closed" % (self.context,))

        conn = self.manager.newConnection()
        try:
            self._prepare(conn)
        except BaseException:
            self._closeSilently(conn)
            self.status = Status.CLOSED
            self.manager._unregister(self)
            raise

        self._connection = conn
        self.status = Status.INITIALIZED
        logger.debug("acquired connection for %r", self.context)
        return conn

    def _prepare(self, conn):
        desired = self.desiredIsolation
        if desired is not None:
            self.originIsolation = conn.getIsolationLevel()
            if self.originIsolation != desired.level:
                self._isolationChanged = True
                conn.setIsolationLevel(desired.level)

        self.originAutoCommit = conn.getAutoCommit()
        if self.originAutoCommit:
            self._autoCommitChanged = True
            conn.setAutoCommit(False)

    def _closeSilently(self, conn):
        # Each step is attempted even if the one before it failed, and
        # nothing raised here reaches the caller.
        if self._isolationChanged:
            silently(conn.setIsolationLevel, self.originIsolation)
        if self._autoCommitChanged:
            silently(conn.setAutoCommit, True)
        silently(conn.close)

    def _checkOpen(self, operation):
        if self.status is Status.CLOSED:
            raise TransactionClosedError(
                "%s() called on the closed transaction for %r"
                % (operation, self.context))

    def commit(self):
        self._checkOpen('commit')
        if self.status is Status.INITIALIZED:
            self._connection.commit()
            logger.debug("commit")

    def rollback(self):
        self._checkOpen('rollback')
        if self.status is Status.INITIALIZED:
            self._connection.rollback()
            logger.debug("rollback")

    def close(self):
        if self.status is Status.INITIALIZED:
            conn = self._connection
            self._connection = None
            if not self._isClosed(conn):
                self._closeSilently(conn)
            logger.debug("close")
        self.status = Status.CLOSED
        self.manager._unregister(self)

    def _isClosed(self, conn):
        try:
            return conn.isClosed()
        except Exception:
            # Can't tell; closing again is harmless.
            return False
