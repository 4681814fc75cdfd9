#!/usr/bin/env python
# Copyright (c) 2015-2016, Juniper Networks, Inc.
# All rights reserved.
#
# Copyright (C) 2012 Martin Blech and individual contributors.
#
# See the LICENSE file for further information.
"""Module that provides XML parsing."""

import logging
import re
from collections import deque
from io import BytesIO
from xml.parsers import expat

from . import parser_defaults
from ._treebuilder import TreeBuilder
from .events import (Name, Namespace, StartDocument, EndDocument,
                     StartElement, EndElement, Comment, ProcessingInstruction,
                     text_event)

__all__ = ['EventReader', 'Parser', 'parse']

logger = logging.getLogger(__name__)

# expat joins the namespace URI, local name and prefix with this.
_NS_SEPARATOR = ' '

# The name of an end tag, starting at the position expat reports for a
# mismatched tag.
_END_TAG_NAME = re.compile(br'(?:</)?\s*([^\s/>]+)')


class EventReader(object):
    """Reads XML events from raw XML using an expat parser.

    Iterating over an :py:class:`EventReader` returns the events one at
    a time. The input is handed to expat in pieces of
    :py:data:`xmltree.parsing_increment` bytes, so events for the start
    of a document are available before the rest of it has been read::

        >>> for event in EventReader("<a>foo</a>"):
        ...   print(event)
        ...
        StartDocument(version='1.0', encoding='utf-8', standalone=None)
        StartElement(name=Name('a', namespace=None, prefix=None), attributes=[], namespace=Namespace({}))
        Characters(data='foo')
        EndElement(name=Name('a', namespace=None, prefix=None))
        EndDocument()

    When expat finds a problem, the events which precede the problem are
    returned and then the :py:exc:`ExpatError` is raised. As a special
    case, an end tag which does not match the open element is returned
    as an :py:class:`EndElement` event before the error is raised, so
    that the tree builder can report it as a nesting problem.

    The reader can only be iterated once.

    Args:
        xml_input (string, bytes, or file-like object): Contains the XML
            to read.
        encoding (string or None): The input's encoding. If not provided,
            expat uses the encoding from the XML declaration (for bytes),
            or 'utf-8' (for text).
        expat (An expat, or equivalent, parser module): Used for parsing the
            XML input. If not provided, defaults to the expat parser in
            :py:data:`xml.parsers`.
        trim_whitespace (bool): If True, strip whitespace at the start and
            end of each text run, and drop runs which become empty.
        whitespace_to_characters (bool): If True, report whitespace-only
            text as :py:class:`Characters` rather than
            :py:class:`Whitespace`.
        cdata_to_characters (bool): If True, report CDATA sections as
            :py:class:`Characters` rather than :py:class:`CData`.
    """

    def __init__(self, xml_input, encoding=None, expat=expat,
                 trim_whitespace=False, whitespace_to_characters=False,
                 cdata_to_characters=False):
        """See class documentation."""
        self._expat = expat
        self._encoding = encoding
        if isinstance(xml_input, str):
            if not self._encoding:
                self._encoding = 'utf-8'
            xml_input = xml_input.encode(self._encoding)
        if isinstance(xml_input, (bytes, bytearray)):
            xml_input = BytesIO(xml_input)
        self._io_obj = xml_input
        self._text_options = dict(
            trim_whitespace=trim_whitespace,
            whitespace_to_characters=whitespace_to_characters,
            cdata_to_characters=cdata_to_characters
        )

        self._parser = None
        self._pending = deque()
        # The input from byte offset _consumed_start on. Only the part after
        # the last markup event is kept.
        self._consumed = bytearray()
        self._consumed_start = 0
        self._last_markup = 0
        self._started = False
        self._text = []
        self._in_cdata = False
        self._new_bindings = []
        self._scopes = [Namespace()]
        self._iterating = False

    def _make_parser(self):
        self._parser = self._expat.ParserCreate(self._encoding, _NS_SEPARATOR)

        # Setup some parser attributes
        self._parser.buffer_text = True
        self._parser.namespace_prefixes = True
        try:
            self._parser.ordered_attributes = True
        except AttributeError: # pragma no cover
            # Jython's expat does not support ordered_attributes
            pass

        # Assign the handler methods to the parser
        self._parser.XmlDeclHandler = self._xml_decl
        self._parser.StartNamespaceDeclHandler = self._start_namespace
        self._parser.StartElementHandler = self._start_element
        self._parser.EndElementHandler = self._end_element
        self._parser.CharacterDataHandler = self._characters
        self._parser.StartCdataSectionHandler = self._start_cdata
        self._parser.EndCdataSectionHandler = self._end_cdata
        self._parser.CommentHandler = self._comment
        self._parser.ProcessingInstructionHandler = self._processing_instruction

    @staticmethod
    def _split_name(full_name):
        parts = full_name.split(_NS_SEPARATOR)
        if len(parts) == 1:
            return Name(parts[0])
        if len(parts) == 2:
            return Name(parts[1], namespace=parts[0])
        return Name(parts[1], namespace=parts[0], prefix=parts[2])

    def _emit(self, event):
        self._start_document()
        self._flush_text()
        self._pending.append(event)

    def _start_document(self, event=None):
        if self._started:
            return
        self._started = True
        if event is None:
            event = StartDocument(encoding=self._encoding or 'utf-8')
        self._pending.append(event)

    def _flush_text(self):
        if not self._text:
            return
        event = text_event(''.join(self._text), cdata=self._in_cdata,
                           **self._text_options)
        self._text = []
        if event is not None:
            self._pending.append(event)

    def _xml_decl(self, version, encoding, standalone):
        if standalone == -1:
            standalone = None
        else:
            standalone = bool(standalone)
        self._start_document(StartDocument(version, encoding or 'utf-8',
                                           standalone))

    def _start_namespace(self, prefix, uri):
        self._new_bindings.append((prefix or '', uri or ''))

    def _start_element(self, full_name, attrs):
        scope = Namespace(self._scopes[-1])
        scope.update(self._new_bindings)
        self._new_bindings = []
        self._scopes.append(scope)

        if isinstance(attrs, dict):
            attrs = list(attrs.items())
        else:
            attrs = list(zip(attrs[0::2], attrs[1::2]))
        attributes = [(self._split_name(k), v) for (k, v) in attrs]
        self._mark_markup()
        self._emit(StartElement(self._split_name(full_name), attributes,
                                scope))

    def _end_element(self, full_name):
        self._scopes.pop()
        self._mark_markup()
        self._emit(EndElement(self._split_name(full_name)))

    def _characters(self, data):
        self._start_document()
        self._text.append(data)

    def _start_cdata(self):
        self._start_document()
        self._flush_text()
        self._in_cdata = True

    def _end_cdata(self):
        self._flush_text()
        self._in_cdata = False

    def _comment(self, data):
        self._mark_markup()
        self._emit(Comment(data))

    def _processing_instruction(self, target, data):
        self._mark_markup()
        self._emit(ProcessingInstruction(target, data or None))

    def _mark_markup(self):
        # A mismatched end tag can only start after the current event.
        self._last_markup = self._parser.CurrentByteIndex

    def _trim_consumed(self):
        drop = self._last_markup - self._consumed_start
        if drop > 0:
            del self._consumed[:drop]
            self._consumed_start = self._last_markup

    def _mismatched_end_tag(self, error):
        # Recover the name of an end tag which expat rejected because it
        # does not match the open element.
        errors = getattr(self._expat, "errors", None)
        if errors is None or not hasattr(errors, "XML_ERROR_TAG_MISMATCH"):
            return None
        codes = getattr(errors, "codes", {})
        if getattr(error, "code", None) != codes.get(
                errors.XML_ERROR_TAG_MISMATCH):
            return None
        pos = self._parser.ErrorByteIndex - self._consumed_start
        if pos < 0:
            return None
        match = _END_TAG_NAME.match(bytes(self._consumed), pos)
        if match is None:
            return None
        return Name.from_qualified(
            match.group(1).decode(self._encoding or 'utf-8', 'replace')
        )

    def __iter__(self):
        if self._iterating:
            raise ValueError("An EventReader can only be iterated once")
        self._iterating = True
        return self._events()

    def _events(self):
        # The current xmltree.parsing_increment, not the value at import.
        from . import parsing_increment
        at_eof = False
        while not at_eof:
            buf = self._io_obj.read(parsing_increment)
            if isinstance(buf, str):
                # A file opened in text mode.
                if not self._encoding:
                    self._encoding = 'utf-8'
                buf = buf.encode(self._encoding)
            if self._parser is None:
                self._make_parser()
            if len(buf) == 0:
                at_eof = True
            self._consumed.extend(buf)

            error = None
            try:
                self._parser.Parse(buf, at_eof)
            except self._expat.ExpatError as e:
                error = e
            else:
                self._trim_consumed()
                if at_eof:
                    self._emit(EndDocument())

            while self._pending:
                yield self._pending.popleft()

            if error is not None:
                name = self._mismatched_end_tag(error)
                if name is not None:
                    yield EndElement(name)
                raise error


class Parser(object):
    """Creates an element tree from raw XML.

    This class creates a callable object used to parse XML into a tree of
    :py:class:`Element` objects. You can provide optional parameters at
    the class creation time. These parameters modify the default behavior
    of the parser. When you invoke the callable object to parse a document,
    you can supply additional parameters to override the values specified
    when the :py:class:`Parser` object was created.

    General usage is::

        >>> myparser = Parser()
        >>> root = myparser('<a x="y"><b>1</b><b>2</b></a>')
        >>> root.name, root.attributes
        ('a', {'x': 'y'})
        >>> [child.text for child in root.children]
        ['1', '2']

    If you will just be using a parser once, you can just use the
    :py:meth:`parse` method, which is a shortcut way of creating a
    :py:class:`Parser` class and calling it all in one call. You can provide
    the same arguments to the :py:meth:`parse` method that you provide to the
    :py:class:`Parser` class.

    Only element content is represented in the tree. Comments and
    whitespace are skipped, and an element's :py:attr:`text` is the last
    run of text which appeared directly inside it. Processing instructions
    are not supported anywhere in the document.

    The whole input is read, including anything after the root element's
    end tag. Input which is not well-formed there, such as a second root
    element in ``<a/><b/>``, raises :py:exc:`MalformedXML` rather than
    being ignored. Comments and processing instructions after the root
    element are ignored.

    When calling the parser, you can specify all of these parameters. When
    creating a parsing instance, you can specify all of these parameters
    except :py:obj:`xml_input`:

    Args:
        xml_input (string, bytes, or file-like object): Contains the XML to
            parse.
        encoding (string or None): The input's encoding. See
            :py:class:`EventReader`.
        expat (An expat, or equivalent, parser module): Used for parsing the
            XML input. If not provided, defaults to the expat parser in
            :py:data:`xml.parsers`.
        trim_whitespace (bool): If True, strip whitespace at the start and
            end of text. If False (the default), keep all whitespace.
        whitespace_to_characters (bool): If True, whitespace-only text is
            stored as an element's text like any other text. If False (the
            default), it is skipped.
        cdata_to_characters (bool): Read CDATA sections as ordinary text.
            This makes no difference to the tree.
        max_depth (int or None): If given, the deepest allowed nesting of
            elements. The root element is at depth 1.

    Returns:
        A callable instance of the :py:class:`Parser` class.

        Calling a :py:class:`Parser` object returns the root
        :py:class:`Element` of the parsed XML tree.

    Raises:
        :py:exc:`TypeError`: If an unknown argument is given.
        :py:exc:`MalformedXML`: (When called.) If the input is not
            well-formed XML.
        :py:exc:`CannotParse`: (When called.) If the XML has a structure
            which cannot be represented.
        :py:exc:`TooDeeplyNested`: (When called.) If elements are nested
            deeper than :py:obj:`max_depth`.
    """

    def __init__(self, **kwargs):
        """See class documentation."""
        # Populate a dictionary with default arguments.
        self._default_kwargs = dict(encoding=None, expat=expat,
                                    trim_whitespace=False,
                                    whitespace_to_characters=False,
                                    cdata_to_characters=False,
                                    max_depth=None)
        self._known_args = set(self._default_kwargs)

        # Update the dictionary with user-provided defaults.
        self._default_kwargs.update(parser_defaults)

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

        # Pop off and save the arguments that we don't want to pass to
        # the reader class.
        self._max_depth = self._kwargs.pop('max_depth')
        self._expat = self._kwargs['expat']

    def _make_builder(self):
        self._builder = TreeBuilder(max_depth=self._max_depth,
                                    lexical_errors=(self._expat.ExpatError,))

    def __call__(self, xml_input, **kwargs):
        """See class documentation."""
        # Make a copy of the default arguments and update that copy with
        # our new arguments.
        self._process_args(**kwargs)
        self._make_builder()

        reader = EventReader(xml_input, **self._kwargs)
        root = self._builder.build(reader)
        logger.debug("Parsed root element <%s> with %d children",
                     root.qualified_name(), len(root.children))
        return root


def parse(xml_input, **kwargs):
    """Create an element tree from raw XML.

    See the :py:class:`Parser` class documentation."""
    return Parser(**kwargs)(xml_input)
