#!/usr/bin/env python
# Copyright (c) 2015-2016, Juniper Networks, Inc.
# All rights reserved.
#
# Copyright (C) 2012 Martin Blech and individual contributors.
#
# See the LICENSE file for further information.
"""Module that provides the XML event types.

   The readers translate their underlying parser's callbacks into these
   events, the tree builder consumes them, and the writer turns them back
   into XML text.
"""

__all__ = [
    'Name', 'Namespace', 'XMLEvent', 'StartDocument', 'EndDocument',
    'StartElement', 'EndElement', 'Characters', 'CData', 'Comment',
    'Whitespace', 'ProcessingInstruction'
]

XML_NAMESPACE = 'http://www.w3.org/XML/1998/namespace'
XMLNS_NAMESPACE = 'http://www.w3.org/2000/xmlns/'

# Bindings which are in scope everywhere and are never declared.
_BUILTIN_BINDINGS = {'xml': XML_NAMESPACE, 'xmlns': XMLNS_NAMESPACE}


class Name(object):
    """A qualified XML name.

    Args:
        local_name (string): The name without its prefix.
        namespace (string or None): The namespace URI, if known.
        prefix (string or None): The prefix used in the document, if any.
    """
    def __init__(self, local_name, namespace=None, prefix=None):
        self.local_name = local_name
        self.namespace = namespace
        self.prefix = prefix or None

    @classmethod
    def from_qualified(cls, qualified, namespace=None):
        """Split a ``prefix:local`` string into a :py:class:`Name`."""
        if ':' in qualified:
            prefix, local_name = qualified.split(':', 1)
            return cls(local_name, namespace, prefix)
        return cls(qualified, namespace)

    def qualified(self):
        """Return the name as it is written in a document.

        Returns:
            ``prefix:local_name`` if the name has a prefix, otherwise
            just ``local_name``.
        """
        if self.prefix:
            return "%s:%s" % (self.prefix, self.local_name)
        return self.local_name

    def __eq__(self, other):
        if not isinstance(other, Name):
            return NotImplemented
        return ((self.local_name, self.namespace, self.prefix) ==
                (other.local_name, other.namespace, other.prefix))

    def __ne__(self, other):
        rv = self.__eq__(other)
        if rv is NotImplemented:
            return rv
        return not rv

    __hash__ = None

    def __repr__(self):
        return "%s(%r, namespace=%r, prefix=%r)" % (
            self.__class__.__name__, self.local_name, self.namespace,
            self.prefix)

    def __str__(self):
        return self.qualified()


def _as_name(name):
    if isinstance(name, Name):
        return name
    return Name.from_qualified(name)


class Namespace(dict):
    """A set of prefix to URI bindings.

    The default namespace is stored under the empty prefix ``''``.
    """
    def is_essentially_empty(self):
        """Determine if the set declares anything of interest.

        Returns:
            A bool that is True if every binding is one of the built-in
                ``xml``/``xmlns`` bindings or the empty default binding.
        """
        for (prefix, uri) in self.items():
            if _BUILTIN_BINDINGS.get(prefix) == uri:
                continue
            if prefix == '' and uri == '':
                continue
            return False
        return True

    def __repr__(self):
        return "%s(%s)" % (self.__class__.__name__, dict.__repr__(self))


class XMLEvent(object):
    """Base class for the XML events."""
    _fields = ()

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in self._fields)

    def __ne__(self, other):
        rv = self.__eq__(other)
        if rv is NotImplemented:
            return rv
        return not rv

    __hash__ = None

    def __repr__(self):
        return "%s(%s)" % (
            self.__class__.__name__,
            ", ".join("%s=%r" % (f, getattr(self, f)) for f in self._fields))


class StartDocument(XMLEvent):
    """The start of a document, with the values from its XML declaration."""
    _fields = ('version', 'encoding', 'standalone')

    def __init__(self, version='1.0', encoding='utf-8', standalone=None):
        self.version = version
        self.encoding = encoding
        self.standalone = standalone


class EndDocument(XMLEvent):
    """The end of a document."""


class StartElement(XMLEvent):
    """A start tag.

    Args:
        name (:py:class:`Name` or string): The element name.
        attributes (iterable): ``(name, value)`` pairs, in document order.
            Names may be :py:class:`Name` objects or strings.
        namespace (:py:class:`Namespace`): All bindings in scope at this
            element.
    """
    _fields = ('name', 'attributes', 'namespace')

    def __init__(self, name, attributes=(), namespace=None):
        self.name = _as_name(name)
        self.attributes = [(_as_name(k), v) for (k, v) in attributes]
        if namespace is None:
            namespace = Namespace()
        self.namespace = namespace


class EndElement(XMLEvent):
    """An end tag. The writer accepts ``None`` for "close the open element"."""
    _fields = ('name',)

    def __init__(self, name=None):
        if name is not None:
            name = _as_name(name)
        self.name = name


class _TextEvent(XMLEvent):
    _fields = ('data',)

    def __init__(self, data):
        self.data = data


class Characters(_TextEvent):
    """A run of character data."""


class CData(_TextEvent):
    """The contents of a CDATA section."""


class Comment(_TextEvent):
    """A comment."""


class Whitespace(_TextEvent):
    """A run of character data containing only whitespace."""


class ProcessingInstruction(XMLEvent):
    """A processing instruction."""
    _fields = ('name', 'data')

    def __init__(self, name, data=None):
        self.name = name
        self.data = data


def _is_whitespace(data):
    return data.strip(' \t\r\n') == ''


def text_event(data, cdata=False, trim_whitespace=False,
               whitespace_to_characters=False, cdata_to_characters=False):
    """Classify a run of text as the appropriate event.

    Args:
        data (string): The text.
        cdata (bool): Whether the text came from a CDATA section.
        trim_whitespace (bool): Strip leading and trailing whitespace, and
            drop the run if nothing is left.
        whitespace_to_characters (bool): Report whitespace-only runs as
            :py:class:`Characters` rather than :py:class:`Whitespace`.
        cdata_to_characters (bool): Report CDATA sections as
            :py:class:`Characters` rather than :py:class:`CData`.

    Returns:
        An event, or None if the run should be dropped.
    """
    if trim_whitespace:
        data = data.strip(' \t\r\n')
        if not data:
            return None
    if cdata:
        if cdata_to_characters:
            return Characters(data)
        return CData(data)
    if _is_whitespace(data) and not whitespace_to_characters:
        return Whitespace(data)
    return Characters(data)
