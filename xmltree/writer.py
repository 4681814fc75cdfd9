#!/usr/bin/env python
# Copyright (c) 2015-2016, Juniper Networks, Inc.
# All rights reserved.
#
# Copyright (C) 2012 Martin Blech and individual contributors.
#
# See the LICENSE file for further information.
"""Module that provides XML output.

   The :py:class:`EventWriter` class turns a sequence of XML events into
   XML text using an :py:class:`xml.sax.saxutils.XMLGenerator`. Formatting
   is controlled by an :py:class:`EmitterConfig` object.
"""

import logging
from xml.sax.saxutils import XMLGenerator
from xml.sax.xmlreader import AttributesImpl

from . import emitter_defaults
from .events import (Namespace, StartDocument, EndDocument, StartElement,
                     EndElement, Characters, CData, Comment, Whitespace,
                     ProcessingInstruction)

__all__ = ['EmitterConfig', 'EventWriter']

logger = logging.getLogger(__name__)


class _XMLGenerator(XMLGenerator):
    # XMLGenerator has no support for comments.
    def comment(self, text):
        """Write a comment."""
        if '--' in text or text.endswith('-'):
            raise ValueError("Comment text cannot contain '--' or end "
                             "with '-'")
        self._finish_pending_start_element()
        self._write("<!--%s-->" % (text,))


class EmitterConfig(object):
    """Formatting options for XML output.

    Defaults come from the built-in values, updated by the
    :py:data:`xmltree.emitter_defaults` dictionary, updated by the
    keyword arguments given here.

    Args:
        encoding (string): The output encoding. (Default: 'utf-8'.)
        write_document_declaration (bool): If True (the default), write
            an XML declaration before the root element.
        perform_indent (bool): If True, start each child element on a new,
            indented line. (Default: False.)
        indent_string (string): The string used for each level of
            indentation. (Default: two spaces.)
        line_separator (string): The string used for new lines when
            indenting. (Default: '\\n'.)
        normalize_empty_elements (bool): If True (the default), write
            elements without content as ``<a/>``. If False, write them
            as ``<a></a>``.
        check_end_names (bool): If True (the default), an end tag must
            name the innermost open element.

    Raises:
        :py:exc:`TypeError`: If an unknown argument is given.
    """

    _defaults = dict(encoding='utf-8',
                     write_document_declaration=True,
                     perform_indent=False,
                     indent_string='  ',
                     line_separator='\n',
                     normalize_empty_elements=True,
                     check_end_names=True)

    def __init__(self, **kwargs):
        """See class documentation."""
        options = dict(self._defaults)
        options.update(emitter_defaults)
        options.update(kwargs)
        for k in options:
            if k not in self._defaults:
                raise TypeError("EmitterConfig got an unexpected keyword "
                                "argument '%s'" % (k,))
        for (k, v) in options.items():
            setattr(self, k, v)

    def __repr__(self):
        return "%s(%s)" % (
            self.__class__.__name__,
            ", ".join("%s=%r" % (k, getattr(self, k))
                      for k in sorted(self._defaults)))


class EventWriter(object):
    """Writes XML events to a file-like object.

    General usage is::

        >>> out = StringIO()
        >>> writer = EventWriter(out, EmitterConfig())
        >>> writer.write(StartElement("a"))
        >>> writer.write(Characters("foo"))
        >>> writer.write(EndElement("a"))
        >>> writer.close()
        >>> out.getvalue()
        '<?xml version="1.0" encoding="utf-8"?>\\n<a>foo</a>'

    The caller owns :py:obj:`output`; :py:meth:`close` flushes it but
    does not close it.

    Args:
        output (file-like object): Where to write the XML. Both text and
            binary objects are accepted.
        config (:py:class:`EmitterConfig` or None): The formatting options.
            If None, the defaults are used.
        handler (function): A method that will return a
            :py:obj:`ContentHandler` object. This method will be called
            with three positional parameters: the output parameter, the
            encoding, and whether empty elements should be shortened.
    """

    def __init__(self, output, config=None, handler=_XMLGenerator):
        """See class documentation."""
        if config is None:
            config = EmitterConfig()
        self.config = config
        self._handler = handler(output, config.encoding,
                                config.normalize_empty_elements)
        self._started = False
        # One entry per open element.
        self._open_names = []
        self._has_children = []
        self._scopes = [Namespace()]

    def write(self, event):
        """Write a single event.

        Args:
            event (:py:class:`XMLEvent`): The event to write.

        Raises:
            :py:exc:`ValueError`: If the event cannot be written at this
                point (for example, an end tag which does not match the
                open element).
            :py:exc:`TypeError`: If the object is not a known event.
        """
        if isinstance(event, StartElement):
            self._start_element(event)
        elif isinstance(event, EndElement):
            self._end_element(event)
        elif isinstance(event, (Characters, CData)):
            self._handler.characters(event.data)
        elif isinstance(event, Whitespace):
            self._handler.ignorableWhitespace(event.data)
        elif isinstance(event, Comment):
            self._handler.comment(event.data)
        elif isinstance(event, ProcessingInstruction):
            self._start_document()
            self._handler.processingInstruction(event.name, event.data or '')
        elif isinstance(event, StartDocument):
            self._start_document()
        elif isinstance(event, EndDocument):
            self.close()
        else:
            raise TypeError("Not an XML event: %r" % (event,))

    def close(self):
        """Finish the document and flush the output."""
        if self._open_names:
            raise ValueError("Document closed with open elements: %s" % (
                ", ".join(self._open_names),))
        self._handler.endDocument()

    def _start_document(self):
        if self._started:
            return
        self._started = True
        if self.config.write_document_declaration:
            self._handler.startDocument()

    def _indent(self, depth):
        self._handler.ignorableWhitespace(
            self.config.line_separator + self.config.indent_string * depth
        )

    def _declarations(self, event, parent_scope):
        # Return the xmlns attributes needed for this element, and the
        # bindings in scope inside it.
        scope = Namespace(parent_scope)
        declarations = []
        for (prefix, uri) in event.namespace.items():
            if prefix in ('xml', 'xmlns'):
                continue
            if scope.get(prefix, '') == uri:
                continue
            scope[prefix] = uri
            declarations.append((prefix, uri))

        # Make sure the element's own namespace is bound to its prefix.
        name = event.name
        if name.namespace is not None:
            prefix = name.prefix or ''
            if scope.get(prefix, '') != name.namespace:
                scope[prefix] = name.namespace
                declarations.append((prefix, name.namespace))
        elif not name.prefix and scope.get('', ''):
            # Undeclare an inherited default namespace.
            scope[''] = ''
            declarations.append(('', ''))

        attrs = {}
        for (prefix, uri) in declarations:
            if prefix:
                attrs["xmlns:" + prefix] = uri
            else:
                attrs["xmlns"] = uri
        return (attrs, scope)

    def _start_element(self, event):
        self._start_document()
        if self._has_children:
            self._has_children[-1] = True
            if self.config.perform_indent:
                self._indent(len(self._has_children))

        (attrs, scope) = self._declarations(event, self._scopes[-1])
        for (name, value) in event.attributes:
            attrs[name.qualified()] = value

        qname = event.name.qualified()
        self._handler.startElement(qname, AttributesImpl(attrs))
        self._open_names.append(qname)
        self._has_children.append(False)
        self._scopes.append(scope)

    def _end_element(self, event):
        if not self._open_names:
            raise ValueError("End tag with no open element")
        qname = self._open_names[-1]
        if (event.name is not None and self.config.check_end_names and
                event.name.qualified() != qname):
            raise ValueError("End tag </%s> does not match open element "
                             "<%s>" % (event.name.qualified(), qname))

        self._open_names.pop()
        self._scopes.pop()
        if self._has_children.pop() and self.config.perform_indent:
            self._indent(len(self._has_children))
        self._handler.endElement(qname)
        if not self._open_names:
            logger.debug("Finished writing root element <%s>", qname)
