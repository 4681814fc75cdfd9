#!/usr/bin/env python
# Copyright (c) 2015-2016, Juniper Networks, Inc.
# All rights reserved.
#
# Copyright (C) 2012 Martin Blech and individual contributors.
#
# See the LICENSE file for further information.
"""Internal module that builds element trees from XML events."""

import logging
from xml.parsers import expat

from .element import Element
from .errors import MalformedXML, CannotParse, TooDeeplyNested
from .events import (StartDocument, EndDocument, StartElement, EndElement,
                     Characters, CData, Comment, Whitespace,
                     ProcessingInstruction)

__all__ = []

logger = logging.getLogger(__name__)


class TreeBuilder(object):
    # Builds a single tree from an iterable of events.
    # parameters are documented under the Parser class.
    def __init__(self, max_depth=None, lexical_errors=(expat.ExpatError,)):
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.max_depth = max_depth
        self.lexical_errors = tuple(lexical_errors)

    def _next_event(self, events):
        try:
            return next(events)
        except StopIteration:
            raise CannotParse("unexpected end of the event stream")
        except self.lexical_errors as e:
            raise MalformedXML(e)

    @staticmethod
    def _element_from_start(event):
        # Later duplicates of an attribute replace earlier ones.
        attributes = {}
        for (name, value) in event.attributes:
            attributes[name.local_name] = value
        namespace_scope = event.namespace
        if namespace_scope is not None and namespace_scope.is_essentially_empty():
            namespace_scope = None
        return Element(event.name.local_name, prefix=event.name.prefix,
                       namespace=event.name.namespace,
                       namespace_scope=namespace_scope,
                       attributes=attributes)

    def _find_root(self, events):
        while True:
            event = self._next_event(events)
            if isinstance(event, StartElement):
                return self._element_from_start(event)
            if isinstance(event, (Comment, Whitespace, StartDocument)):
                continue
            raise CannotParse("%s before the root element" % (
                event.__class__.__name__,))

    def _build_body(self, events, root):
        # The in-progress elements, innermost last. Each element is added
        # to its parent only once its end tag has been seen.
        stack = [root]
        while True:
            event = self._next_event(events)
            item = stack[-1]
            if isinstance(event, EndElement):
                if (event.name is not None and
                        event.name.local_name != item.name):
                    raise CannotParse("end tag </%s> does not match <%s>" % (
                        event.name.qualified(), item.qualified_name()))
                stack.pop()
                if not stack:
                    return item
                stack[-1].children.append(item)
            elif isinstance(event, StartElement):
                if self.max_depth is not None and len(stack) >= self.max_depth:
                    logger.debug("Element <%s> exceeds the maximum depth of "
                                 "%d", event.name.qualified(), self.max_depth)
                    raise TooDeeplyNested(self.max_depth)
                stack.append(self._element_from_start(event))
            elif isinstance(event, (Characters, CData)):
                item.text = event.data
            elif isinstance(event, (Whitespace, Comment)):
                pass
            elif isinstance(event, (StartDocument, EndDocument,
                                    ProcessingInstruction)):
                raise CannotParse("%s inside element <%s>" % (
                    event.__class__.__name__, item.qualified_name()))
            else:
                raise CannotParse("unknown event %r" % (event,))

    def _drain(self, events):
        # Pull the rest of the events so the reader can report problems
        # which follow the root element.
        while True:
            try:
                next(events)
            except StopIteration:
                return
            except self.lexical_errors as e:
                raise MalformedXML(e)

    def build(self, events):
        """Build a tree from an iterable of events.

           Returns the root :py:class:`Element`. Raises
           :py:exc:`MalformedXML`, :py:exc:`CannotParse`, or
           :py:exc:`TooDeeplyNested`.
        """
        events = iter(events)
        root = self._find_root(events)
        root = self._build_body(events, root)
        self._drain(events)
        return root
