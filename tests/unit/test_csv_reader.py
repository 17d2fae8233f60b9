import io

import pytest

from android_strings.csv_reader import read_narrow_table, read_wide_table
from android_strings.errors import StringsSyntaxError
from android_strings.models import TranslatedRecord


def wide(text, allowed_locales=None):
    return read_wide_table(io.StringIO(text), allowed_locales)


class TestReadWideTable:
    def test_one_bucket_per_allowed_locale(self):
        buckets = wide(
            "string_name,default_locale,french,spanish\n"
            "s1,english 1,french 1,spanish 1\n",
            {"french", "spanish"},
        )
        assert [bucket.locale for bucket in buckets] == ["french", "spanish"]
        assert buckets[0].records == [TranslatedRecord("s1", "english 1", "french 1")]
        assert buckets[1].records == [TranslatedRecord("s1", "english 1", "spanish 1")]

    def test_columns_outside_allow_list_are_skipped(self):
        buckets = wide("string_name,default_locale,french,german\ns1,e,f,g\n", {"german", "italian"})
        assert [bucket.locale for bucket in buckets] == ["german"]

    def test_no_allow_list_keeps_every_column(self):
        buckets = wide("string_name,default_locale,french,german\ns1,e,f,g\n")
        assert [bucket.locale for bucket in buckets] == ["french", "german"]

    def test_empty_cells_and_blank_lines_are_skipped(self):
        buckets = wide(
            "string_name,default_locale,french,spanish\n"
            "\n"
            "s1,english 1,,spanish 1\n"
            "\n"
            "s2,english 2,french 2,\n"
        )
        assert [r.name for r in buckets[0].records] == ["s2"]
        assert [r.name for r in buckets[1].records] == ["s1"]

    def test_cells_are_trimmed_and_quotes_honoured(self):
        buckets = wide(
            "string_name , default_locale , french\n"
            ' s1 , "Hello, world" , "Bonjour, le monde"\n'
        )
        assert buckets[0].records == [TranslatedRecord("s1", "Hello, world", "Bonjour, le monde")]

    def test_header_only(self):
        buckets = wide("string_name,default_locale,french\n")
        assert buckets[0].records == []

    @pytest.mark.parametrize("text, message", [
        ("", "Too few values in header (at least 3 required)"),
        ("string_name,default_locale\n", "Too few values in header (at least 3 required)"),
        ("name,default_locale,french\n", "First header should be named string_name"),
        ("string_name,english,french\n", "Second header should be named default_locale"),
        ("string_name,default_locale,french,\n", "Headers can't be empty strings"),
    ])
    def test_bad_header(self, text, message):
        with pytest.raises(StringsSyntaxError) as excinfo:
            wide(text)
        assert excinfo.value.message == message

    def test_row_length_must_match_header(self):
        with pytest.raises(StringsSyntaxError, match="Found record with 3 fields, but the header has 4 fields"):
            wide("string_name,default_locale,french,spanish\ns1,e,f\n")

    def test_empty_name(self):
        with pytest.raises(StringsSyntaxError, match="string_name can't be empty for any record"):
            wide("string_name,default_locale,french\n,e,f\n")


class TestReadNarrowTable:
    def test_reads_records(self):
        records = read_narrow_table(io.StringIO("s1,english 1,french 1\n\ns2, english 2 , french 2\n"))
        assert records == [
            TranslatedRecord("s1", "english 1", "french 1"),
            TranslatedRecord("s2", "english 2", "french 2"),
        ]

    @pytest.mark.parametrize("text, message", [
        ("s1\n", 'Too few values in record (exactly 3 required). 1st field => "s1"'),
        ("s1,english\n", 'Too few values in record (exactly 3 required). 2nd field => "english"'),
        ("s1,english,french,extra\n", 'Too many values in record (exactly 3 required). 4th field => "extra"'),
        (",english,french\n", "string_name can't be empty for any record"),
    ])
    def test_bad_record(self, text, message):
        with pytest.raises(StringsSyntaxError) as excinfo:
            read_narrow_table(io.StringIO(text))
        assert excinfo.value.message == message

    def test_empty_table(self):
        assert read_narrow_table(io.StringIO("")) == []
