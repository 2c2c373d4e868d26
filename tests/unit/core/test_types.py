"""Tests for the canonical value types."""

from datetime import date, datetime

import pytest

from fmgen import (
    Array,
    Boolean,
    Format,
    Frontmatter,
    Null,
    Number,
    Object,
    String,
    Tagged,
    UnknownFormatError,
    ValueKind,
    from_python,
    parse_scalar,
)


class TestFormat:
    """Tests for the Format enum."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("yaml", Format.YAML),
            ("YML", Format.YAML),
            (" Toml ", Format.TOML),
            ("json", Format.JSON),
        ],
    )
    def test_from_name(self, name, expected):
        """Should look up formats case-insensitively."""
        assert Format.from_name(name) is expected

    def test_from_name_unknown(self):
        """Should raise UnknownFormatError naming the input."""
        with pytest.raises(UnknownFormatError, match="xml"):
            Format.from_name("xml")

    def test_delimiters(self):
        """Each format should know its fence."""
        assert Format.YAML.delimiter == "---"
        assert Format.TOML.delimiter == "+++"
        assert Format.JSON.delimiter == "{"

    def test_str(self):
        """str() should be the lowercase name."""
        assert str(Format.TOML) == "toml"


class TestNumber:
    """Tests for Number."""

    def test_integers_are_stored_as_floats(self):
        """Should coerce ints to float."""
        number = Number(3)
        assert isinstance(number.value, float)
        assert number == Number(3.0)

    def test_rejects_bool(self):
        """Should refuse to hold a bool."""
        with pytest.raises(TypeError):
            Number(True)

    def test_display_drops_integral_fraction(self):
        """Integral numbers should print without a fraction."""
        assert str(Number(42)) == "42"
        assert str(Number(-3.0)) == "-3"
        assert str(Number(1.5)) == "1.5"


class TestValueAccessors:
    """Tests for the accessor helpers shared by all values."""

    def test_matching_accessors(self):
        """Accessors should return the payload for the matching kind."""
        assert String("x").as_str() == "x"
        assert Number(2).as_float() == 2.0
        assert Boolean(True).as_bool() is True
        assert Array([Null()]).as_array() == [Null()]
        assert Tagged("!t", String("v")).as_tagged() == ("!t", String("v"))

        fm = Frontmatter()
        assert Object(fm).as_object() is fm

    def test_mismatched_accessors_return_none(self):
        """Accessors for another kind should return None."""
        assert String("x").as_float() is None
        assert Number(1).as_str() is None
        assert Null().as_array() is None
        assert Boolean(False).as_object() is None

    def test_kind_predicates(self):
        """is_* helpers should follow the kind."""
        assert Null().is_null()
        assert String("").is_string()
        assert not String("").is_number()
        assert Tagged("!t", Null()).is_tagged()
        assert Tagged("!t", Null()).kind is ValueKind.TAGGED

    def test_array_len(self):
        """array_len should only answer for arrays."""
        assert Array([Number(1), Number(2)]).array_len() == 2
        assert String("ab").array_len() is None

    def test_to_python(self):
        """to_python should produce plain data."""
        value = Array([Null(), Boolean(True), Number(1), Tagged("!t", String("v"))])
        assert value.to_python() == [None, True, 1.0, {"tag": "!t", "value": "v"}]

    def test_strict_conversions(self):
        """to_* conversions return the payload or raise TypeError."""
        fm = Frontmatter()
        assert String("x").to_str() == "x"
        assert Number(2).to_float() == 2.0
        assert Boolean(False).to_bool() is False
        assert Object(fm).to_object() is fm

        with pytest.raises(TypeError, match="not a string"):
            Number(42).to_str()
        with pytest.raises(TypeError, match="not a number"):
            String("3.14").to_float()
        with pytest.raises(TypeError, match="not a boolean"):
            String("true").to_bool()
        with pytest.raises(TypeError, match="not an object"):
            Array([]).to_object()


class TestTagged:
    """Tests for Tagged construction."""

    def test_plain_inner_value_is_converted(self):
        """Plain Python inner values become canonical values."""
        assert Tagged("!x", "raw").value == String("raw")
        assert Tagged("!n", 5).value == Number(5)
        assert Tagged("!nil", None).value == Null()

    def test_unconvertible_inner_value(self):
        """Inner values with no canonical form are refused up front."""
        with pytest.raises(TypeError):
            Tagged("!x", object())


class TestDisplay:
    """Tests for str() of values."""

    def test_string_escapes_quotes(self):
        """Strings should be quoted with quotes and backslashes escaped."""
        assert str(String('say "hi"\\')) == '"say \\"hi\\"\\\\"'

    def test_array_and_tagged(self):
        """Arrays and tagged values should render JSON-like."""
        assert str(Array([Number(1), String("a"), Null()])) == '[1, "a", null]'
        assert str(Tagged("!color", String("red"))) == '"!color": "red"'

    def test_object_sorts_keys(self):
        """Objects should render with sorted keys."""
        fm = Frontmatter.from_dict({"b": True, "a": 1})
        assert str(Object(fm)) == '{"a": 1, "b": true}'


class TestFromPython:
    """Tests for from_python."""

    def test_scalars(self):
        """Should map Python scalars onto values."""
        assert from_python(None) == Null()
        assert from_python(True) == Boolean(True)
        assert from_python(7) == Number(7)
        assert from_python("x") == String("x")

    def test_dates_become_iso_strings(self):
        """Dates and datetimes should become ISO 8601 strings."""
        assert from_python(date(2023, 5, 20)) == String("2023-05-20")
        assert from_python(datetime(2023, 5, 20, 8, 30)) == String("2023-05-20T08:30:00")

    def test_containers(self):
        """Lists and mappings should convert recursively."""
        value = from_python({"tags": ("a", "b"), "meta": {"n": 1}})
        assert isinstance(value, Object)
        assert value.frontmatter.get("tags") == Array([String("a"), String("b")])
        assert value.frontmatter.get("meta").as_object().get("n") == Number(1)

    def test_values_pass_through(self):
        """Existing values should be returned unchanged."""
        value = String("x")
        assert from_python(value) is value

    def test_unsupported_type(self):
        """Should raise TypeError for unknown objects."""
        with pytest.raises(TypeError):
            from_python(object())


class TestParseScalar:
    """Tests for parse_scalar."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("null", Null()),
            ("NULL", Null()),
            ("True", Boolean(True)),
            ("false", Boolean(False)),
            ("42", Number(42)),
            ("-1.5", Number(-1.5)),
            ("hello", String("hello")),
            ("", String("")),
        ],
    )
    def test_parse_scalar(self, text, expected):
        """Should pick the scalar type the text looks like."""
        assert parse_scalar(text) == expected
