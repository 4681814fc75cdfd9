#!/usr/bin/env python
# Copyright (c) 2015-2016, Juniper Networks, Inc.
# All rights reserved.
#
# Copyright (C) 2012 Martin Blech and individual contributors.
#
# See the LICENSE file for further information.
"""Module that provides the Element class.

   An :py:class:`Element` is one node of the tree. It owns its attribute
   dictionary and its list of children.
"""

import logging
from io import StringIO

from .events import Name, Namespace, StartElement, EndElement, Characters
from .writer import EmitterConfig, EventWriter

__all__ = ['Element']

logger = logging.getLogger(__name__)


class Element(object):
    """Represents an XML element.

    Normally, you can simply create an element with just a name::

        >>> node = Element("name")

    All other fields start out empty. You can also fill them in with
    keyword arguments, or by setting the attributes directly::

        >>> node.attributes["first"] = "bob"
        >>> node.children.append(Element("nickname", text="bobby"))

    Args:
        name (string): The local name of the element, without any prefix.
        prefix (string or None): The namespace prefix used at this tag.
        namespace (string or None): The namespace URI of this tag.
        namespace_scope (:py:class:`Namespace` or None): Every prefix to
            URI binding in scope at this element.
        attributes (`dict`): The XML attributes, keyed by local name.
        children (list): The child :py:class:`Element` objects.
        text (string or None): The text directly inside this element.
    """

    def __init__(self, name, prefix=None, namespace=None,
                 namespace_scope=None, attributes=None, children=None,
                 text=None):
        self.prefix = prefix
        self.namespace = namespace
        self.namespace_scope = namespace_scope
        self.name = name
        if attributes is None:
            attributes = {}
        self.attributes = attributes
        if children is None:
            children = []
        self.children = children
        self.text = text

    def _fields(self):
        return (self.prefix, self.namespace, self.namespace_scope, self.name,
                self.attributes, self.children, self.text)

    def __eq__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        return self._fields() == other._fields()

    def __ne__(self, other):
        rv = self.__eq__(other)
        if rv is NotImplemented:
            return rv
        return not rv

    __hash__ = None

    def __repr__(self):
        return "%s(%r, attributes=%r, children=<%d>, text=%r)" % (
            self.__class__.__name__, self.qualified_name(), self.attributes,
            len(self.children), self.text)

    def qualified_name(self):
        """Return the element name as it is written, with any prefix."""
        return self._xml_name().qualified()

    def _xml_name(self):
        return Name(self.name, self.namespace, self.prefix)

    @classmethod
    def parse(cls, xml_input, **kwargs):
        """Parse XML into an element tree.

        This is a shortcut for :py:func:`xmltree.parse`. Any keyword
        arguments are passed to the :py:class:`Parser`.

        Args:
            xml_input (string, bytes, or file-like object): The XML to parse.

        Returns:
            The root :py:class:`Element`.

        Raises:
            :py:exc:`MalformedXML`: If the input is not well-formed XML.
            :py:exc:`CannotParse`: If the XML has a structure this class
                cannot represent.
            :py:exc:`TooDeeplyNested`: If ``max_depth`` was given and the
                elements are nested deeper than that.
        """
        # Late import; the parser modules import this one.
        from .xmlparser import parse
        return parse(xml_input, **kwargs)

    def _start_event(self):
        attributes = [(Name(k), v) for (k, v) in self.attributes.items()]
        namespace = self.namespace_scope
        if namespace is None:
            namespace = Namespace()
        return StartElement(self._xml_name(), attributes, namespace)

    def _write(self, writer):
        # Walk the tree with an explicit stack so that the depth of the
        # tree is not limited by the interpreter's recursion limit.
        writer.write(self._start_event())
        if self.text is not None:
            writer.write(Characters(self.text))
        stack = [(self, iter(self.children))]
        while stack:
            node, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                writer.write(EndElement(node._xml_name()))
                continue
            writer.write(child._start_event())
            if child.text is not None:
                writer.write(Characters(child.text))
            stack.append((child, iter(child.children)))

    def write(self, output=None, **kwargs):
        """Write this element as the root element of a new XML document.

        Any keyword arguments are used to create an :py:class:`EmitterConfig`
        object. For example::

            >>> root = Element("a", text="foo")
            >>> print(root.write(write_document_declaration=False))
            <a>foo</a>

        Args:
            output (A file-like IO object, or None): The file-like IO object
                in which output should be placed. Both text and binary
                objects are accepted. If None, the method will return the
                XML output as a string.

        Returns:
            If :py:obj:`output` was None, the method will return the XML
            output as a string. Otherwise, None.

        Raises:
            :py:exc:`TypeError`: If an unknown keyword argument is given.
            Any exception raised by :py:obj:`output` is passed on unchanged.
        """
        return self.write_with_config(output, EmitterConfig(**kwargs))

    def write_with_config(self, output, config):
        """Write this element as the root of a new XML document.

        Args:
            output (A file-like IO object, or None): See :py:meth:`write`.
            config (:py:class:`EmitterConfig`): The formatting options.

        Returns:
            If :py:obj:`output` was None, the XML output as a string.
            Otherwise, None.
        """
        if output is None:
            output = StringIO()
            return_text = True
        else:
            return_text = False

        writer = EventWriter(output, config)
        self._write(writer)
        writer.close()
        logger.debug("Wrote document with root element <%s>",
                     self.qualified_name())

        if return_text:
            return output.getvalue()

    def get_child(self, name):
        """Find the first child with the given name.

        Only the direct children of this element are searched, and only
        the local name is compared.

        Args:
            name (string): The local name to look for.

        Returns:
            The first matching :py:class:`Element`, or None.
        """
        for child in self.children:
            if child.name == name:
                return child
        return None

    def get_mut_child(self, name):
        """Find the first child with the given name, for modification.

        The returned object is the child itself (not a copy), so changes
        made to it are made to the tree. The lookup is the same as
        :py:meth:`get_child`.

        Args:
            name (string): The local name to look for.

        Returns:
            The first matching :py:class:`Element`, or None.
        """
        return self.get_child(name)

    def take_child(self, name):
        """Remove the first child with the given name and return it.

        The child keeps its own subtree. If no child matches, the tree
        is left unchanged.

        Args:
            name (string): The local name to look for.

        Returns:
            The removed :py:class:`Element`, or None.
        """
        for (i, child) in enumerate(self.children):
            if child.name == name:
                return self.children.pop(i)
        return None
