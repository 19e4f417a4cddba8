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
import threading


__all__ = ['locked',
           'silently',
           'Lock',
           ]

Lock = threading.Lock


class Locked:

    def __init__(self, func, inst=None, class_=None):
        self.__func__ = func
        self.__self__ = inst
        self.__self_class__ = class_

    def __get__(self, inst, class_):
        return self.__class__(self.__func__, inst, class_)

    def __call__(self, *args, **kw):
        inst = self.__self__
        if inst is None:
            inst = args[0]
        func = self.__func__.__get__(self.__self__, self.__self_class__)

        with inst._lock:
            return func(*args, **kw)


def locked(func):
    """Run a method while holding its instance's ``_lock``.
    """
    return Locked(func)


def silently(func, *args):
    """Call func, discarding any exception it raises.

    Only for cleanup steps whose failure must not hide the outcome the
    caller is already dealing with.  Returns true if func succeeded.
    """
    try:
        func(*args)
    except Exception:
        return False
    return True
