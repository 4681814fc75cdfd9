#!/usr/bin/env python
# Copyright (c) 2015-2016, Juniper Networks, Inc.
# All rights reserved.
#
# Copyright (C) 2012 Martin Blech and individual contributors.
#
# See the LICENSE file for further information.

import sys
import unittest
from io import BytesIO, StringIO

import xmltree
from xmltree import (Element, EmitterConfig, EventWriter, parse,
                     StartDocument, EndDocument, StartElement, EndElement,
                     Characters, CData, Comment, Whitespace,
                     ProcessingInstruction)

_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'


class BrokenIO(StringIO):
    def write(self, data):
        raise IOError("disk full")


class ElementWriteTestCase(unittest.TestCase):
    def test_minimal(self):
        self.assertEqual(Element('r').write(), _DECLARATION + '<r/>')

    def test_no_declaration(self):
        self.assertEqual(Element('r').write(write_document_declaration=False),
                         '<r/>')

    def test_empty_elements(self):
        self.assertEqual(Element('r').write(write_document_declaration=False,
                                            normalize_empty_elements=False),
                         '<r></r>')

    def test_text_and_children(self):
        root = Element('a', attributes={'x': '1'}, text='t', children=[
            Element('b', text='1'), Element('c')])
        self.assertEqual(root.write(write_document_declaration=False),
                         '<a x="1">t<b>1</b><c/></a>')

    def test_escaping(self):
        root = Element('r', attributes={'y': 'a"b<&'}, text='<&>')
        self.assertEqual(root.write(write_document_declaration=False),
                         '<r y=\'a"b&lt;&amp;\'>&lt;&amp;&gt;</r>')

    def test_bytes_output(self):
        out = BytesIO()
        self.assertIsNone(Element('r', text='\xe9').write(out))
        self.assertEqual(out.getvalue(),
                         _DECLARATION.encode('ascii') + b'<r>\xc3\xa9</r>')

    def test_other_encoding(self):
        out = BytesIO()
        Element('r', text='\xe9€').write(out, encoding='iso-8859-1')
        self.assertEqual(out.getvalue(),
                         b'<?xml version="1.0" encoding="iso-8859-1"?>\n'
                         b'<r>\xe9&#8364;</r>')

    def test_text_output(self):
        out = StringIO()
        self.assertIsNone(Element('r').write(out))
        self.assertEqual(out.getvalue(), _DECLARATION + '<r/>')

    def test_indent(self):
        root = Element('a', children=[
            Element('b', children=[Element('c')]),
            Element('d', text='x'),
        ])
        self.assertEqual(root.write(write_document_declaration=False,
                                    perform_indent=True),
                         '<a>\n  <b>\n    <c/>\n  </b>\n  <d>x</d>\n</a>')
        self.assertEqual(root.write(write_document_declaration=False,
                                    perform_indent=True, indent_string='\t',
                                    line_separator='\r\n'),
                         '<a>\r\n\t<b>\r\n\t\t<c/>\r\n\t</b>\r\n\t<d>x</d>'
                         '\r\n</a>')

    def test_namespace_round_trip(self):
        xml = '<r xmlns="urn:d" xmlns:p="urn:p"><p:c a="1"/><d/></r>'
        self.assertEqual(parse(xml).write(write_document_declaration=False),
                         xml)

    def test_namespace_declared(self):
        self.assertEqual(
            Element('a', namespace='urn:x').write(
                write_document_declaration=False),
            '<a xmlns="urn:x"/>')
        self.assertEqual(
            Element('a', prefix='p', namespace='urn:x').write(
                write_document_declaration=False),
            '<p:a xmlns:p="urn:x"/>')
        root = Element('a', namespace='urn:x',
                       children=[Element('b', namespace='urn:x')])
        self.assertEqual(root.write(write_document_declaration=False),
                         '<a xmlns="urn:x"><b/></a>')

    def test_default_namespace_undeclared(self):
        xml = '<a xmlns="urn:u"><b xmlns=""><c/></b><d/></a>'
        root = parse(xml)
        out = root.write(write_document_declaration=False)
        self.assertEqual(out, xml)
        rv = parse(out)
        self.assertEqual(rv, root)
        self.assertIsNone(rv.children[0].namespace)
        self.assertIsNone(rv.children[0].children[0].namespace)
        self.assertEqual(rv.children[1].namespace, 'urn:u')

    def test_default_namespace_undeclared_built(self):
        root = Element('a', namespace='urn:u', children=[Element('b')])
        self.assertEqual(root.write(write_document_declaration=False),
                         '<a xmlns="urn:u"><b xmlns=""/></a>')

    def test_round_trip(self):
        xml = ('<a x="1" y="2"><b>&lt;u&gt;</b><c><d z="w"/></c>'
               '<p:e xmlns:p="urn:p">v</p:e></a>')
        root = parse(xml)
        self.assertEqual(parse(root.write()), root)
        self.assertEqual(parse(root.write(perform_indent=True)), root)
        out = BytesIO()
        root.write(out)
        self.assertEqual(parse(out.getvalue()), root)

    def test_deep_tree(self):
        depth = sys.getrecursionlimit() + 100
        root = Element('d')
        node = root
        for i in range(depth - 1):
            child = Element('d')
            node.children.append(child)
            node = child
        self.assertEqual(root.write(write_document_declaration=False),
                         '<d>' * (depth - 1) + '<d/>' + '</d>' * (depth - 1))

    def test_output_error(self):
        self.assertRaises(IOError, Element('r').write, BrokenIO())

    def test_unknown_argument(self):
        self.assertRaises(TypeError, Element('r').write, no_such_option=True)

    def test_emitter_defaults(self):
        xmltree.emitter_defaults['write_document_declaration'] = False
        try:
            rv = Element('r').write()
        finally:
            del xmltree.emitter_defaults['write_document_declaration']
        self.assertEqual(rv, '<r/>')
        self.assertEqual(Element('r').write(), _DECLARATION + '<r/>')

    def test_write_with_config(self):
        config = EmitterConfig(write_document_declaration=False,
                               perform_indent=True)
        root = Element('a', children=[Element('b')])
        self.assertEqual(root.write_with_config(None, config),
                         '<a>\n  <b/>\n</a>')

    def test_logging(self):
        with self.assertLogs('xmltree', level='DEBUG') as cm:
            Element('a').write()
        self.assertTrue(any("root element <a>" in line for line in cm.output))


class EventWriterTestCase(unittest.TestCase):
    def setUp(self):
        self.out = StringIO()

    def make_writer(self, **kwargs):
        return EventWriter(self.out, EmitterConfig(**kwargs))

    def test_events(self):
        writer = self.make_writer()
        for event in [StartDocument(), ProcessingInstruction('pi', 'data'),
                      StartElement('a', [('x', '1')]), Comment(' c '),
                      Characters('x'), CData('y'), Whitespace(' '),
                      EndElement('a'), EndDocument()]:
            writer.write(event)
        self.assertEqual(self.out.getvalue(),
                         _DECLARATION + '<?pi data?><a x="1"><!-- c -->xy '
                         '</a>')

    def test_declaration_once(self):
        writer = self.make_writer()
        writer.write(StartDocument())
        writer.write(StartDocument())
        writer.write(StartElement('a'))
        writer.write(EndElement())
        writer.close()
        self.assertEqual(self.out.getvalue(), _DECLARATION + '<a/>')

    def test_default_config(self):
        writer = EventWriter(self.out)
        writer.write(StartElement('a'))
        writer.write(EndElement('a'))
        writer.close()
        self.assertEqual(self.out.getvalue(), _DECLARATION + '<a/>')

    def test_end_without_start(self):
        writer = self.make_writer()
        self.assertRaises(ValueError, writer.write, EndElement('a'))

    def test_mismatched_end(self):
        writer = self.make_writer()
        writer.write(StartElement('a'))
        self.assertRaises(ValueError, writer.write, EndElement('b'))

    def test_unchecked_end(self):
        writer = self.make_writer(write_document_declaration=False,
                                  check_end_names=False)
        writer.write(StartElement('a'))
        writer.write(EndElement('b'))
        writer.close()
        self.assertEqual(self.out.getvalue(), '<a/>')

    def test_close_with_open_elements(self):
        writer = self.make_writer()
        writer.write(StartElement('a'))
        self.assertRaises(ValueError, writer.close)

    def test_bad_comment(self):
        writer = self.make_writer()
        writer.write(StartElement('a'))
        self.assertRaises(ValueError, writer.write, Comment('a--b'))

    def test_not_an_event(self):
        writer = self.make_writer()
        self.assertRaises(TypeError, writer.write, '<a/>')

    def test_unknown_config(self):
        self.assertRaises(TypeError, EmitterConfig, no_such_option=True)


if __name__ == '__main__':
    unittest.main()
