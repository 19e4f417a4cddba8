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
"""Transaction isolation levels.

Each level maps to the integer code drivers use for it.  The codes
follow the JDBC numbering, which most relational drivers reuse.
"""
import enum


class IsolationLevel(enum.Enum):
    """A transaction isolation level.

    >>> IsolationLevel.SERIALIZABLE.level
    8
    >>> IsolationLevel.valueOf(2)
    <IsolationLevel.READ_COMMITTED: 2>
    >>> IsolationLevel.fromName('repeatable read')
    <IsolationLevel.REPEATABLE_READ: 4>
    """

    NONE = 0
    READ_UNCOMMITTED = 1
    READ_COMMITTED = 2
    REPEATABLE_READ = 4
    SERIALIZABLE = 8

    @property
    def level(self):
        return self.value

    @classmethod
    def valueOf(cls, level):
        """Return the isolation level for a driver code.

        Raises ValueError for codes that name no level.
        """
        return cls(level)

    @classmethod
    def fromName(cls, name):
        """Return the isolation level named by name.

        Case is ignored, and words may be separated by blanks, dashes
        or underscores.
        """
        key = '_'.join(name.replace('-', ' ').replace('_', ' ').split())
        try:
            return cls[key.upper()]
        except KeyError:
            raise ValueError("Unknown isolation level: %r" % name)
