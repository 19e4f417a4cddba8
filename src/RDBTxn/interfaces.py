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
"""Transaction manager interfaces
"""

from zope.interface import Attribute
from zope.interface import Interface


class IConnection(Interface):
    """A physical connection to a relational database.

    This is what a transaction manager's connector must produce.  Raw
    DB-API connections rarely look like this; wrap them in an adapter
    (see RDBTxn.sqlite) that exposes the session settings below.
    """

    def getIsolationLevel():
        """Return the integer code of the current isolation level.
        """

    def setIsolationLevel(level):
        """Change the isolation level to the given integer code.
        """

    def getAutoCommit():
        """Return true if each statement is committed on its own.
        """

    def setAutoCommit(autocommit):
        """Turn autocommit mode on or off.
        """

    def commit():
        """Commit the work done since the last commit or rollback.
        """

    def rollback():
        """Discard the work done since the last commit or rollback.
        """

    def close():
        """Release the connection.
        """

    def isClosed():
        """Return true if close() was called.
        """


class ITransaction(Interface):
    """One logical transaction, bound to one execution context.

    The physical connection isn't acquired until the connection
    attribute is first read.
    """

    connection = Attribute(
        """The connection used by the transaction, an IConnection.

        Reading it the first time acquires a connection from the
        manager, applies the requested isolation level and turns
        autocommit off.  If any of that fails, the connection is
        closed and the error is raised.  Later reads return the same
        connection.
        """)

    def commit():
        """Commit the transaction.

        Does nothing if the connection was never acquired.
        """

    def rollback():
        """Roll back the transaction.

        Does nothing if the connection was never acquired.
        """

    def close():
        """End the transaction.

        Restores the connection's isolation level and autocommit mode,
        closes it and unregisters the transaction from its manager.
        This never raises and may be called more than once.
        """


class ITransactionManager(Interface):
    """Tracks the open transaction of each execution context.

    An execution context is any hashable handle the caller uses to
    identify a logical thread of work, such as a thread id or a
    request object.
    """

    connector = Attribute(
        "A callable, taking no arguments, that returns an IConnection.")

    defaultIsolation = Attribute(
        """The IsolationLevel used when none is passed to
        newTransaction(), or None to leave the connection's own level.
        """)

    def currentTransaction(context):
        """Return the open transaction for context, or None.
        """

    def newTransaction(context, isolation=None):
        """Open and return a new transaction for context.

        Raises AlreadyInTransaction if context already has one.  The
        returned transaction has not acquired a connection yet.
        """

    def newConnection():
        """Return a new connection from the connector.
        """
