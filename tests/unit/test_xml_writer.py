import io
import unittest

from android_strings.errors import StringsIOError, StringsLogicError
from android_strings.models import LocalizableString
from android_strings.xml_reader import read_strings
from android_strings.xml_writer import render_strings, serialize_value, write_strings


class FailingSink:
    def write(self, text):
        raise OSError("disk full")

    def flush(self):
        pass


class TestSerializeValue(unittest.TestCase):
    def test_plain_text(self):
        self.assertEqual(serialize_value("Hello %1$s"), "Hello %1$s")

    def test_escaped_apostrophe_is_untouched(self):
        self.assertEqual(serialize_value("Don\\'t"), "Don\\'t")

    def test_carriage_return_becomes_character_reference(self):
        self.assertEqual(serialize_value("a\r\nb"), "a&#13;\nb")

    def test_cdata_written_verbatim(self):
        self.assertEqual(serialize_value("a <![CDATA[<b>&</b>]]> c"), "a <![CDATA[<b>&</b>]]> c")

    def test_markup_in_value_is_logic_error(self):
        with self.assertRaises(StringsLogicError):
            serialize_value("Tom & Jerry")
        with self.assertRaises(StringsLogicError):
            serialize_value("a < b")


class TestRenderStrings(unittest.TestCase):
    def test_document_layout(self):
        document = render_strings([
            LocalizableString.localizable("greeting", "Hello"),
            LocalizableString.unlocalizable("app_id", "com.example"),
            LocalizableString.localizable("blank", ""),
        ])
        self.assertEqual(document, (
            '<?xml version="1.0" encoding="utf-8"?>\n'
            '<resources>\n'
            '    <string name="greeting">Hello</string>\n'
            '    <string name="app_id" translatable="false">com.example</string>\n'
            '    <string name="blank" />\n'
            '</resources>\n'
        ))

    def test_empty_document(self):
        self.assertEqual(render_strings([]), '<?xml version="1.0" encoding="utf-8"?>\n<resources />\n')

    def test_name_attribute_is_escaped(self):
        self.assertIn('name="a&quot;b"', render_strings([LocalizableString("a\"b", "x")]))

    def test_attribute_whitespace_is_kept(self):
        strings = [LocalizableString("a\tb\r\nc", "x")]
        self.assertEqual(read_strings(io.StringIO(render_strings(strings))), strings)


class TestWriteStrings(unittest.TestCase):
    def test_round_trip(self):
        strings = [
            LocalizableString.localizable("plain", "Hello world"),
            LocalizableString.unlocalizable("flag", "keep me"),
            LocalizableString.localizable("cdata", "x <![CDATA[<i>y</i>]]> z"),
            LocalizableString.localizable("only_cdata", "<![CDATA[<u>&</u>]]>"),
            LocalizableString.localizable("format", "%1$s has %2$d items, don\\'t"),
            LocalizableString.localizable("unicode", "Grüße ✓"),
            LocalizableString.localizable("carriage_return", "line1\rline2"),
            LocalizableString.localizable("crlf", "line1\r\nline2 <![CDATA[<b>x</b>]]>\r"),
        ]
        sink = io.StringIO()
        write_strings(sink, strings)

        self.assertEqual(read_strings(io.StringIO(sink.getvalue())), strings)

    def test_write_failure_is_io_error(self):
        with self.assertRaises(StringsIOError):
            write_strings(FailingSink(), [LocalizableString("a", "b")])

    def test_nothing_written_when_a_value_is_invalid(self):
        sink = io.StringIO()
        with self.assertRaises(StringsLogicError):
            write_strings(sink, [LocalizableString("a", "ok"), LocalizableString("b", "<broken")])
        self.assertEqual(sink.getvalue(), "")


if __name__ == '__main__':
    unittest.main()
