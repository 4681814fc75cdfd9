#!/usr/bin/env python
# Copyright (c) 2015-2016, Juniper Networks, Inc.
# All rights reserved.
#
# Copyright (C) 2012 Martin Blech and individual contributors.
#
# See the LICENSE file for further information.
"""Module that provides LXML/ElementTree parsing."""

# pylint: disable=wrong-import-position

import logging

import xml.etree.ElementTree as _stdlib_etree

try: # pragma no cover
    from lxml import etree
except ImportError: # pragma no cover
    etree = _stdlib_etree

from . import parser_defaults
from ._treebuilder import TreeBuilder
from .events import (Name, Namespace, StartDocument, EndDocument,
                     StartElement, EndElement, Comment, ProcessingInstruction,
                     text_event)

# pylint: enable=wrong-import-position

__all__ = ['EtreeEventReader', 'EtreeParser', 'parse_etree']

logger = logging.getLogger(__name__)

# The tag values of comment and processing instruction nodes.
_COMMENT_FACTORIES = (etree.Comment, _stdlib_etree.Comment)
_PI_FACTORIES = (etree.PI, _stdlib_etree.PI)


class QNameSeparator(object): # pylint: disable=too-few-public-methods
    """Class to separate an XML identifier into its namespace and name
       components.
    """
    def __init__(self, text):
        endidx = text.rfind('}')
        if not text or text[0] != '{' or endidx < 0:
            self.namespace = None
            self.localname = text
        else:
            self.namespace = text[1:endidx]
            self.localname = text[endidx+1:]


class EtreeEventReader(object):
    """Reads XML events from an :py:class:`ElementTree` object.

    The reader walks the tree and returns the same events the
    :py:class:`EventReader` would return for the equivalent XML text.
    An element's :py:attr:`text` is returned after its start tag, and
    each child's :py:attr:`tail` is returned after the child's end tag.

    With :py:mod:`lxml`, the original namespace prefixes and bindings are
    available, as are comments and processing instructions which precede
    or follow the root element. With :py:mod:`xml.etree.ElementTree`,
    names only carry their namespace URI, and comments and processing
    instructions are seen only if the tree was built with
    ``insert_comments``/``insert_pis``.

    Args:
        etree_root (:py:class:`ElementTree` or element): The tree to read.
        trim_whitespace (bool): See :py:class:`EventReader`.
        whitespace_to_characters (bool): See :py:class:`EventReader`.
    """

    def __init__(self, etree_root, trim_whitespace=False,
                 whitespace_to_characters=False):
        """See class documentation."""
        if not hasattr(etree_root, 'tag'):
            etree_root = etree_root.getroot()
        self._root = etree_root
        self._text_options = dict(
            trim_whitespace=trim_whitespace,
            whitespace_to_characters=whitespace_to_characters
        )

    def __iter__(self):
        return self._events()

    def _text(self, text):
        if text:
            event = text_event(text, **self._text_options)
            if event is not None:
                yield event

    @staticmethod
    def _name(node):
        parsed_tag = QNameSeparator(node.tag)
        return Name(parsed_tag.localname, namespace=parsed_tag.namespace,
                    prefix=getattr(node, 'prefix', None))

    @staticmethod
    def _namespace(node):
        # Only lxml keeps the bindings in scope at each node.
        nsmap = getattr(node, 'nsmap', None)
        if not nsmap:
            return Namespace()
        return Namespace((prefix or '', uri) for (prefix, uri) in nsmap.items())

    @staticmethod
    def _attributes(node):
        attributes = []
        for (k, v) in node.attrib.items():
            parsed_attr = QNameSeparator(k)
            attributes.append((Name(parsed_attr.localname,
                                    namespace=parsed_attr.namespace), v))
        return attributes

    def _misc_node(self, node):
        # Comments and processing instructions, from either library.
        if node.tag in _COMMENT_FACTORIES:
            yield Comment(node.text or '')
        elif node.tag in _PI_FACTORIES:
            target = getattr(node, 'target', None)
            if target is None:
                # ElementTree keeps "target data" together in the text.
                (target, _, data) = (node.text or '').partition(' ')
            else:
                data = node.text
            yield ProcessingInstruction(target, data or None)

    def _parse_node(self, node):
        # Walk the tree with an explicit stack of (node, child iterator)
        # pairs, so deep trees do not hit the recursion limit.
        stack = []
        current = node
        while True:
            if current is not None:
                if not isinstance(current.tag, str):
                    for event in self._misc_node(current):
                        yield event
                    if stack:
                        for event in self._text(current.tail):
                            yield event
                else:
                    yield StartElement(self._name(current),
                                       self._attributes(current),
                                       self._namespace(current))
                    for event in self._text(current.text):
                        yield event
                    stack.append((current, iter(current)))
            if not stack:
                return
            (parent, children) = stack[-1]
            current = next(children, None)
            if current is None:
                stack.pop()
                yield EndElement(self._name(parent))
                if stack:
                    for event in self._text(parent.tail):
                        yield event
                else:
                    return

    def _events(self):
        yield StartDocument()
        if hasattr(self._root, 'itersiblings'):
            preceding = list(self._root.itersiblings(preceding=True))
            for node in reversed(preceding):
                for event in self._misc_node(node):
                    yield event
        for event in self._parse_node(self._root):
            yield event
        if hasattr(self._root, 'itersiblings'):
            for node in self._root.itersiblings():
                for event in self._misc_node(node):
                    yield event
        yield EndDocument()


class EtreeParser(object):
    """Creates an element tree from an :py:class:`ElementTree` object.

    This class returns a callable object. You can provide parameters at
    the class creation time. These parameters modify the default
    parameters for the parser. When you call the callable object to
    parse a document, you can supply additional parameters to override
    the default values.

    General usage is like this::

        >>> myparser = EtreeParser()
        >>> root = myparser(etree.fromstring("<a><b>1</b></a>"))
        >>> root.get_child("b").text
        '1'

    For detailed usage information, please see the :py:class:`Parser`
    class. Other than the differences noted below, the behavior of
    the two classes should be the same.

    Namespace Identifiers:

    In :py:mod:`xml.etree.ElementTree`, the original namespace
    identifiers are not maintained. The elements will have their
    namespace URI but no prefix, and the writer will declare each
    namespace as the default namespace where it is used. To avoid this,
    use :py:mod:`lxml`.

    Single-invocation Parsing:

    If you will just be using a parser once, you can just use the
    :py:meth:`parse_etree` method, which is a shortcut way of creating a
    :py:class:`EtreeParser` class and calling it all in one call. You
    can provide the same arguments to the :py:meth:`parse_etree` method
    that you can provide to the :py:class:`EtreeParser` class.

    Args:
        etree_root (:py:class:`ElementTree`): An :py:class:`ElementTree`
            object representing the tree you wish to parse.

    Also accepts the :py:obj:`trim_whitespace`,
    :py:obj:`whitespace_to_characters`, and :py:obj:`max_depth` arguments
    of the :py:class:`Parser` class.
    """

    def __init__(self, **kwargs):
        """See the class documentation."""
        # Populate a dictionary with default arguments.
        self._default_kwargs = dict(trim_whitespace=False,
                                    whitespace_to_characters=False,
                                    max_depth=None)
        self._known_args = set(self._default_kwargs)

        # Update the dictionary with user-provided defaults, after
        # stripping out arguments not appropriate for this
        # context.
        for (k, v) in parser_defaults.items():
            if k in self._known_args:
                self._default_kwargs[k] = v

        # Update the dictionary with the provided arguments. We will save
        # the arguments for later use.
        self._default_kwargs.update(kwargs)

        # Process the arguments, and make a builder to catch argument
        # errors now.
        self._process_args()
        self._make_builder()

    def _process_args(self, **kwargs):
        # Make a copy of the default kwargs database.
        self._kwargs = dict(self._default_kwargs)

        # Update the dictionary with the provided arguments.
        self._kwargs.update(kwargs)

        for k in self._kwargs:
            if k not in self._known_args:
                raise TypeError("%s got an unexpected keyword argument "
                                "'%s'" % (self.__class__.__name__, k))

        # Pop off and save the argument(s) that we don't want to pass
        # to the reader class.
        self._max_depth = self._kwargs.pop('max_depth')

    def _make_builder(self):
        self._builder = TreeBuilder(max_depth=self._max_depth)

    def __call__(self, etree_root, **kwargs):
        """See the class documentation."""
        # Make a copy of the default arguments and update that copy with
        # our new arguments.
        self._process_args(**kwargs)
        self._make_builder()

        reader = EtreeEventReader(etree_root, **self._kwargs)
        root = self._builder.build(reader)
        logger.debug("Parsed root element <%s> with %d children",
                     root.qualified_name(), len(root.children))
        return root


def parse_etree(etree_root, **kwargs):
    """Create an element tree from an :py:class:`ElementTree` object.

    See the :py:class:`EtreeParser` class documentation."""
    return EtreeParser(**kwargs)(etree_root)
