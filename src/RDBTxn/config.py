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
"""Open a transaction manager from a configuration."""
import functools
import importlib
import io
import os

import ZConfig

import RDBTxn
from RDBTxn.isolation import IsolationLevel
from RDBTxn.TransactionManager import TransactionManager


schema_path = os.path.join(RDBTxn.__path__[0], "config.xml")
_schema = None


def getSchema():
    global _schema
    if _schema is None:
        _schema = ZConfig.loadSchema(schema_path)
    return _schema


def managerFromString(s):
    """Create a transaction manager from a configuration string.

    The string must contain a single ``transactionmanager`` section.
    """
    return managerFromFile(io.StringIO(s))


def managerFromFile(f):
    """Create a transaction manager from a file object providing
    configuration.

    See :func:`managerFromString`.
    """
    config, handle = ZConfig.loadConfigFile(getSchema(), f)
    return managerFromConfig(config.manager)


def managerFromURL(url):
    """Create a transaction manager from a URL (or file name) providing
    configuration.
    """
    config, handler = ZConfig.loadConfig(getSchema(), url)
    return managerFromConfig(config.manager)


def managerFromConfig(section):
    return section.open()


def isolation_level(value):
    # ZConfig reports the ValueError for unknown names.
    return IsolationLevel.fromName(value)


def resolve(name):
    """Import the object a dotted name refers to."""
    module_name, _, attr = name.rpartition('.')
    wanted = module_name or name
    try:
        module = importlib.import_module(wanted)
    except ModuleNotFoundError as e:
        # Only a missing connector module is a configuration problem;
        # errors raised while importing a module that exists propagate.
        if e.name is None or not (
                wanted == e.name or wanted.startswith(e.name + '.')):
            raise
        raise ZConfig.ConfigurationError(
            "Can't import connector %r" % name) from e
    if not module_name:
        return module
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ZConfig.ConfigurationError(
            "Module %r has no attribute %r" % (module_name, attr)) from e


class BaseConfig:
    """Object representing a configured transaction manager.

    Methods:

    open() -- create and return the configured object

    Attributes:

    name   -- name of the section

    """

    def __init__(self, config):
        self.config = config
        self.name = config.getSectionName()

    def open(self):
        """Create and return the configured object."""
        raise NotImplementedError


class TransactionManagerFactory(BaseConfig):

    def open(self):
        section = self.config
        connector = resolve(section.connector)
        if section.dsn is not None:
            connector = functools.partial(connector, section.dsn)
        return TransactionManager(
            connector, defaultIsolation=section.default_isolation)
