#!/usr/bin/env python
# Copyright (c) 2015-2016, Juniper Networks, Inc.
# All rights reserved.
#
# Copyright (C) 2012 Martin Blech and individual contributors.
#
# See the LICENSE file for further information.
"""xmltree parses XML into a simple in-memory element tree and writes it back.

For a quick start, you can use the :py:meth:`Element.parse` method to convert
a block of XML into a tree of :py:class:`Element` objects::

    >>> root = Element.parse('<names><name first="bob"/></names>')
    >>> root.get_child("name").attributes
    {'first': 'bob'}

Elements can be changed in place and written back out with the
:py:meth:`Element.write` method::

    >>> root.get_mut_child("name").attributes["suffix"] = "mr"
    >>> print(root.write(write_document_declaration=False))
    <names><name first="bob" suffix="mr"/></names>

Each element keeps only the last run of text that appeared directly inside
it, and attributes are stored by their local name.
"""

import logging

# While reading a document, feed the XML text to expat 1KB at a time.
# Note: While parsing_increment is only used by one module, it makes sense
# to keep it here, since someone might want to override it, and we expect to
# only publicly expose the package (and not individual modules).
parsing_increment = 1024

# A user can use this to set their custom defaults for parsers.
parser_defaults = {}

# A user can use this to set their custom defaults for EmitterConfig objects.
emitter_defaults = {}


__author__ = 'Juniper Networks'
__version__ = '0.1.0'
__license__ = 'MIT'
__all__ = [
    'Element', 'Name', 'Namespace', 'XMLEvent', 'StartDocument',
    'EndDocument', 'StartElement', 'EndElement', 'Characters', 'CData',
    'Comment', 'Whitespace', 'ProcessingInstruction', 'EventReader',
    'Parser', 'parse', 'EtreeEventReader', 'EtreeParser', 'parse_etree',
    'EmitterConfig', 'EventWriter', 'ParseError', 'MalformedXML',
    'CannotParse', 'TooDeeplyNested'
]

logging.getLogger(__name__).addHandler(logging.NullHandler())

# These imports are purposely at the end because they depend on things that
# are defined above this line.
# pylint: disable=wrong-import-position

from .events import (Name, Namespace, XMLEvent, StartDocument, EndDocument,
                     StartElement, EndElement, Characters, CData, Comment,
                     Whitespace, ProcessingInstruction)
from .errors import ParseError, MalformedXML, CannotParse, TooDeeplyNested
from .element import Element
from .writer import EmitterConfig, EventWriter
from .xmlparser import EventReader, Parser, parse
from .etreeparser import EtreeEventReader, EtreeParser, parse_etree
