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
"""A TransactionManager controls transaction boundaries.

It keeps, for each execution context, the transaction that context
has open, and hands out connections from a connector function.

An execution context is whatever hashable handle the caller uses to
name a logical thread of work.  It is always passed explicitly;
threadContext() returns a handle for the calling thread for code that
wants one transaction per thread.
"""
import contextlib
import logging
import threading

from zope.interface import implementer

from RDBTxn.Exceptions import AlreadyInTransaction
from RDBTxn.interfaces import ITransactionManager
from RDBTxn.Transaction import Status
from RDBTxn.Transaction import Transaction
from RDBTxn.utils import Lock
from RDBTxn.utils import locked


logger = logging.getLogger('RDBTxn.TransactionManager')


def threadContext():
    """Return an execution-context handle for the calling thread."""
    return threading.get_ident()


@implementer(ITransactionManager)
class TransactionManager:
    """Transaction manager working with any IConnection source.

    connector is called, without arguments, each time a connection is
    needed.  It may open a new connection or take one from a pool; the
    manager doesn't care, but it does close every connection it is
    done with.

    If defaultIsolation is given, transactions started without an
    explicit isolation level use it.
    """

    def __init__(self, connector, defaultIsolation=None):
        self._connector = connector
        self._defaultIsolation = defaultIsolation

        # _txns maps execution contexts to their open transaction.
        # Each entry is only written by its own context, but contexts
        # may hop between threads, so the dict is guarded by _lock.
        self._txns = {}
        self._lock = Lock()

    @property
    def connector(self):
        return self._connector

    @property
    def defaultIsolation(self):
        return self._defaultIsolation

    def currentTransaction(self, context):
        return self._txns.get(context)

    @locked
    def newTransaction(self, context, isolation=None):
        if context in self._txns:
            raise AlreadyInTransaction(
                "Context %r is already in a transaction." % (context,))

        if isolation is None:
            isolation = self._defaultIsolation
        txn = self._txns[context] = Transaction(self, context, isolation)
        return txn

    @locked
    def _unregister(self, txn):
        # A closed transaction may linger after its context has started
        # a new one; only drop the entry if it is still ours.
        if self._txns.get(txn.context) is txn:
            del self._txns[txn.context]

    def newConnection(self):
        return self._connector()

    def transaction(self, context, isolation=None):
        """Execute a block of code as a transaction.

        The ``transaction`` method returns a context manager that can
        be used with the ``with`` statement.  It provides the
        transaction, which is committed if the block succeeds, rolled
        back if it raises, and closed either way.

        If context already has a transaction, the block simply joins
        it: the transaction is provided as-is and left for its owner
        to end.  The isolation argument is ignored in that case.
        """
        return ContextManager(self, context, isolation)

    @contextlib.contextmanager
    def connection(self, context):
        """Provide a connection for a block of code.

        Within a transaction, this is the transaction's connection,
        and it stays open.  Otherwise a new connection is opened and
        closed after the block.
        """
        txn = self.currentTransaction(context)
        if txn is not None:
            yield txn.connection
            return

        conn = self.newConnection()
        try:
            yield conn
        finally:
            conn.close()


class ContextManager:
    """PEP 343 context manager
    """

    def __init__(self, manager, context, isolation=None):
        self.manager = manager
        self.context = context
        self.isolation = isolation

    def __enter__(self):
        txn = self.manager.currentTransaction(self.context)
        self.outer = txn is None
        if self.outer:
            txn = self.manager.newTransaction(self.context, self.isolation)
        self.txn = txn
        return txn

    def __exit__(self, t, v, tb):
        if not self.outer:
            return

        txn = self.txn
        try:
            if txn.status is Status.CLOSED:
                # Closed inside the block, or acquiring its connection
                # failed; there is nothing left to end.
                pass
            elif t is None:
                txn.commit()
            else:
                try:
                    txn.rollback()
                except Exception:
                    # The error that got us here is the one to report.
                    logger.exception("Rollback failed for %r", txn)
        finally:
            txn.close()
