#!/usr/bin/env python
# Copyright (c) 2015-2016, Juniper Networks, Inc.
# All rights reserved.
#
# Copyright (C) 2012 Martin Blech and individual contributors.
#
# See the LICENSE file for further information.
"""Module that provides the parsing exceptions."""

__all__ = ['ParseError', 'MalformedXML', 'CannotParse', 'TooDeeplyNested']


class ParseError(Exception):
    """Base class for errors raised while building an element tree."""


class MalformedXML(ParseError):
    """Raised when the reader finds that the input is not well-formed XML.

       The reader's own exception is available in the :py:attr:`error`
       attribute.
    """
    def __init__(self, error):
        self.error = error
        ParseError.__init__(self, error)

    def __str__(self):
        return "Malformed XML. %s" % (self.error,)

    def __repr__(self):
        return "%s(error=%r)" % (self.__class__.__name__, self.error)


class CannotParse(ParseError):
    """Raised when well-formed XML has a structure that cannot be represented.

       This happens when an end tag does not match the open element, or when
       a processing instruction, text, or document boundary appears where
       only element content is allowed.
    """
    def __init__(self, reason=None):
        self.reason = reason
        ParseError.__init__(self)

    def __str__(self):
        if self.reason:
            return "Cannot parse: %s" % (self.reason,)
        return "Cannot parse"

    def __repr__(self):
        return "%s(reason=%r)" % (self.__class__.__name__, self.reason)


class TooDeeplyNested(ParseError):
    """Raised when elements are nested deeper than the configured maximum."""
    def __init__(self, max_depth):
        self.max_depth = max_depth
        ParseError.__init__(self)

    def __str__(self):
        return "Elements are nested more than %d levels deep" % (
            self.max_depth,)

    def __repr__(self):
        return "%s(max_depth=%r)" % (self.__class__.__name__, self.max_depth)
