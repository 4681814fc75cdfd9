#!/usr/bin/env python
# Copyright (c) 2015-2016, Juniper Networks, Inc.
# All rights reserved.
#
# Copyright (C) 2012 Martin Blech and individual contributors.
#
# See the LICENSE file for further information.

import sys
import unittest
from xml.parsers import expat

from xmltree import (Element, Name, Namespace, StartDocument, EndDocument,
                     StartElement, EndElement, Characters, CData, Comment,
                     Whitespace, ProcessingInstruction, MalformedXML,
                     CannotParse, TooDeeplyNested)
from xmltree._treebuilder import TreeBuilder


def _failing(events, error):
    for event in events:
        yield event
    raise error


class TreeBuilderTestCase(unittest.TestCase):
    def build(self, events, **kwargs):
        return TreeBuilder(**kwargs).build(events)

    def test_minimal(self):
        rv = self.build([StartDocument(), StartElement('r'), EndElement('r'),
                         EndDocument()])
        self.assertEqual(rv, Element('r'))

    def test_no_start_document(self):
        rv = self.build([StartElement('r'), EndElement('r')])
        self.assertEqual(rv, Element('r'))

    def test_duplicate_attributes(self):
        rv = self.build([StartElement('r', [('a', '1'), ('a', '2')]),
                         EndElement('r')])
        self.assertEqual(rv.attributes, {'a': '2'})

    def test_attribute_prefix_dropped(self):
        rv = self.build([
            StartElement('r', [(Name('a', 'urn:p', 'p'), '1')],
                         Namespace({'p': 'urn:p'})),
            EndElement('r')])
        self.assertEqual(rv.attributes, {'a': '1'})
        self.assertEqual(rv.namespace_scope, Namespace({'p': 'urn:p'}))

    def test_last_text_wins(self):
        rv = self.build([StartElement('a'), Characters('a'),
                         Characters('b'), EndElement('a')])
        self.assertEqual(rv.text, 'b')
        rv = self.build([StartElement('a'), CData('a'), Comment('c'),
                         Characters('b'), Whitespace(' '), EndElement('a')])
        self.assertEqual(rv.text, 'b')

    def test_children(self):
        rv = self.build([
            StartDocument(), Comment('before'), Whitespace('\n'),
            StartElement('a', [('x', 'y')]),
            StartElement('b'), Characters('1'), EndElement('b'),
            Whitespace('\n'),
            StartElement('c'), StartElement('d'), EndElement('d'),
            EndElement('c'),
            EndElement('a'), Comment('after'), EndDocument()])
        expected = Element('a', attributes={'x': 'y'}, children=[
            Element('b', text='1'),
            Element('c', children=[Element('d')]),
        ])
        self.assertEqual(rv, expected)

    def test_end_without_name(self):
        rv = self.build([StartElement('a'), StartElement('b'), EndElement(),
                         EndElement()])
        self.assertEqual(rv, Element('a', children=[Element('b')]))

    def test_essentially_empty_scope(self):
        scope = Namespace({'': '', 'xml': 'http://www.w3.org/XML/1998/namespace'})
        rv = self.build([StartElement('a', namespace=scope), EndElement('a')])
        self.assertIsNone(rv.namespace_scope)

    def test_rejected_before_root(self):
        for event in [EndDocument(), EndElement('a'), Characters('x'),
                      CData('x'), ProcessingInstruction('pi', 'data')]:
            self.assertRaises(CannotParse, self.build,
                              [StartDocument(), event, StartElement('a'),
                               EndElement('a')])

    def test_rejected_in_body(self):
        for event in [StartDocument(), EndDocument(),
                      ProcessingInstruction('pi')]:
            self.assertRaises(CannotParse, self.build,
                              [StartElement('a'), event, EndElement('a')])

    def test_mismatched_end(self):
        self.assertRaises(CannotParse, self.build,
                          [StartElement('a'), StartElement('b'),
                           EndElement('a')])

    def test_unknown_event(self):
        self.assertRaises(CannotParse, self.build,
                          [StartElement('a'), 'text', EndElement('a')])

    def test_truncated_stream(self):
        for events in [[], [StartDocument()], [StartElement('a')],
                       [StartElement('a'), StartElement('b'),
                        EndElement('b')]]:
            try:
                self.build(events)
            except CannotParse as e:
                self.assertEqual(str(e), "Cannot parse: unexpected end of "
                                 "the event stream")
            else:
                self.fail("No error for %r" % (events,))

    def test_lexical_error(self):
        error = expat.ExpatError("not well-formed")
        try:
            self.build(_failing([StartElement('a')], error))
        except MalformedXML as e:
            self.assertIs(e.error, error)
        else:
            self.fail("No error raised")

    def test_lexical_error_before_root(self):
        error = expat.ExpatError("no element found")
        self.assertRaises(MalformedXML, self.build, _failing([], error))

    def test_lexical_error_after_root(self):
        error = expat.ExpatError("junk after document element")
        self.assertRaises(MalformedXML, self.build,
                          _failing([StartElement('a'), EndElement('a'),
                                    Comment('c')], error))

    def test_other_lexical_errors(self):
        class TokenizerError(Exception):
            pass

        self.assertRaises(MalformedXML, self.build,
                          _failing([StartElement('a')], TokenizerError()),
                          lexical_errors=(TokenizerError,))
        self.assertRaises(expat.ExpatError, self.build,
                          _failing([StartElement('a')],
                                   expat.ExpatError("x")),
                          lexical_errors=(TokenizerError,))

    def test_trailing_events_ignored(self):
        rv = self.build([StartElement('a'), EndElement('a'),
                         ProcessingInstruction('pi'), Characters('x'),
                         EndDocument()])
        self.assertEqual(rv, Element('a'))

    def test_max_depth(self):
        events = [StartElement('a'), StartElement('b'), StartElement('c'),
                  EndElement('c'), EndElement('b'), EndElement('a')]
        self.assertEqual(self.build(events, max_depth=3).name, 'a')
        try:
            self.build(events, max_depth=2)
        except TooDeeplyNested as e:
            self.assertEqual(e.max_depth, 2)
        else:
            self.fail("No error raised")

    def test_invalid_max_depth(self):
        self.assertRaises(ValueError, TreeBuilder, max_depth=0)

    def test_deep_nesting(self):
        depth = sys.getrecursionlimit() * 2

        def events():
            for i in range(depth):
                yield StartElement('d%d' % (i,))
            for i in reversed(range(depth)):
                yield EndElement('d%d' % (i,))

        node = self.build(events())
        for i in range(depth):
            self.assertEqual(node.name, 'd%d' % (i,))
            self.assertEqual(len(node.children), 1 if i < depth - 1 else 0)
            if node.children:
                node = node.children[0]

    def test_reusable(self):
        builder = TreeBuilder()
        for i in range(0, 2):
            rv = builder.build([StartElement('a'), EndElement('a')])
            self.assertEqual(rv, Element('a'))


if __name__ == '__main__':
    unittest.main()
