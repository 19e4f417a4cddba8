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
"""Per-context transactions for relational databases.
"""

from RDBTxn.Exceptions import AlreadyInTransaction
from RDBTxn.Exceptions import ProtocolMisuseError
from RDBTxn.Exceptions import TransactionClosedError
from RDBTxn.isolation import IsolationLevel
from RDBTxn.Transaction import Transaction
from RDBTxn.TransactionManager import TransactionManager
from RDBTxn.TransactionManager import threadContext
