"""Tests for the TOML adapter."""

import tomllib

import pytest

from fmgen import (
    Array,
    Boolean,
    Frontmatter,
    NestingTooDeepError,
    Null,
    Number,
    Object,
    ParseOptions,
    String,
    SyntaxParseError,
    Tagged,
    UnsupportedValueError,
)
from fmgen.formats import TomlFormat


@pytest.fixture
def adapter() -> TomlFormat:
    return TomlFormat()


class TestTomlParse:
    """Tests for TomlFormat.parse."""

    def test_scalars_and_tables(self, adapter):
        """Should map TOML values onto canonical values."""
        raw = 'title = "My Post"\ncount = 3\ndraft = true\ntags = ["a", "b"]\n\n[author]\nname = "Ada"\n'
        fm = adapter.parse(raw, ParseOptions())
        assert fm.get("title") == String("My Post")
        assert fm.get("count") == Number(3)
        assert fm.get("draft") == Boolean(True)
        assert fm.get("tags") == Array([String("a"), String("b")])
        assert fm.get("author").as_object().get("name") == String("Ada")

    def test_dates_become_strings(self, adapter):
        """Dates and datetimes should be read as ISO 8601 text."""
        fm = adapter.parse("day = 1979-05-27\nat = 1979-05-27T07:32:00\n", ParseOptions())
        assert fm.get("day") == String("1979-05-27")
        assert fm.get("at") == String("1979-05-27T07:32:00")

    def test_tagged_table_is_revived(self, adapter):
        """A table with exactly tag and value keys is a Tagged value."""
        fm = adapter.parse('[color]\ntag = "!color"\nvalue = "red"\n', ParseOptions())
        assert fm.get("color") == Tagged("!color", String("red"))

    def test_syntax_error(self, adapter):
        """Invalid TOML should raise SyntaxParseError with a line number."""
        with pytest.raises(SyntaxParseError) as exc_info:
            adapter.parse('title = "ok"\ncount = \n', ParseOptions())
        assert exc_info.value.format_name == "toml"
        assert exc_info.value.context.line == 2
        assert isinstance(exc_info.value.__cause__, tomllib.TOMLDecodeError)

    def test_depth_limit(self, adapter):
        """Nested tables count towards the depth limit."""
        with pytest.raises(NestingTooDeepError) as exc_info:
            adapter.parse("[a.b.c.d]\ne = 1\n", ParseOptions(max_depth=3))
        assert exc_info.value.depth == 4


class TestTomlSerialize:
    """Tests for TomlFormat.serialize."""

    def test_scalars(self, adapter):
        """Integral numbers should be written as integers."""
        fm = Frontmatter.from_dict({"title": "My Post", "count": 3, "ratio": 0.5, "draft": False})
        assert adapter.serialize(fm) == 'title = "My Post"\ncount = 3\nratio = 0.5\ndraft = false\n'

    def test_null_is_rejected(self, adapter):
        """TOML has no null, so any reachable Null must fail."""
        fm = Frontmatter.from_dict({"title": "x", "subtitle": None})
        with pytest.raises(UnsupportedValueError) as exc_info:
            adapter.serialize(fm)
        assert exc_info.value.format_name == "toml"
        assert exc_info.value.path == "subtitle"

    @pytest.mark.parametrize(
        "data,path",
        [
            ({"meta": {"nested": {"gone": None}}}, "meta.nested.gone"),
            ({"list": [1, None]}, "list[1]"),
        ],
    )
    def test_nested_null_is_rejected(self, adapter, data, path):
        """The error should name the path of the Null."""
        with pytest.raises(UnsupportedValueError) as exc_info:
            adapter.serialize(Frontmatter.from_dict(data))
        assert exc_info.value.path == path

    def test_tagged_null_is_rejected(self, adapter):
        """Null inside a tagged value is still reachable."""
        fm = Frontmatter()
        fm.insert("t", Tagged("!x", Null()))
        with pytest.raises(UnsupportedValueError):
            adapter.serialize(fm)

    def test_round_trip(self, adapter, sample_frontmatter):
        """Null-free containers should survive a round trip."""
        text = adapter.serialize(sample_frontmatter)
        assert adapter.parse(text, ParseOptions()) == sample_frontmatter

    def test_nested_object_round_trip(self, adapter):
        """Nested objects become tables and come back as objects."""
        inner = Frontmatter.from_dict({"name": "Ada", "langs": ["en", "fr"]})
        fm = Frontmatter()
        fm.insert("author", Object(inner))
        assert adapter.parse(adapter.serialize(fm), ParseOptions()) == fm
