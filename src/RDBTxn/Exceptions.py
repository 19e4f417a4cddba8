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
"""RDBTxn-defined exceptions

Errors raised by database drivers (failing to connect, failing to
change session settings, failing to commit) are never translated.
They reach the caller as the driver raised them.
"""

import transaction.interfaces


class RDBTxnError(transaction.interfaces.TransactionError):
    """Base class for errors raised by the transaction manager."""


class ProtocolMisuseError(RDBTxnError):
    """The transaction protocol was used incorrectly.

    These are programming errors.  They are not transient and retrying
    the operation won't help.
    """


class AlreadyInTransaction(ProtocolMisuseError,
                           transaction.interfaces.AlreadyInTransaction):
    """A transaction was started for a context that already has one."""


class TransactionClosedError(ProtocolMisuseError):
    """An operation was attempted on a closed transaction."""
