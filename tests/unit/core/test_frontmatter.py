"""Tests for the Frontmatter container."""

import pytest

from fmgen import Array, Format, Frontmatter, Null, Number, Object, String


def make(data: dict) -> Frontmatter:
    return Frontmatter.from_dict(data)


class TestMappingOperations:
    """Tests for get/insert/remove and friends."""

    def test_insert_returns_previous(self):
        """insert should return the replaced value, or None."""
        fm = Frontmatter()
        assert fm.insert("title", "first") is None
        assert fm.insert("title", "second") == String("first")
        assert fm.get("title") == String("second")

    def test_insert_converts_python_values(self):
        """Plain Python values should be converted on insert."""
        fm = Frontmatter()
        fm.insert("tags", ["a", 1])
        assert fm.get("tags") == Array([String("a"), Number(1)])

    def test_insert_rejects_non_string_keys(self):
        """Keys must be strings."""
        with pytest.raises(TypeError):
            Frontmatter().insert(1, "x")

    def test_remove(self):
        """remove should return the removed value and forget the key."""
        fm = make({"a": 1})
        assert fm.remove("a") == Number(1)
        assert fm.remove("a") is None
        assert fm.is_empty()

    def test_contains_and_len(self):
        """contains_key, in and len should agree."""
        fm = make({"a": 1, "b": None})
        assert fm.contains_key("a")
        assert "b" in fm
        assert "c" not in fm
        assert len(fm) == 2

    def test_is_null(self):
        """is_null should be true only for present Null values."""
        fm = make({"a": None, "b": 0})
        assert fm.is_null("a")
        assert not fm.is_null("b")
        assert not fm.is_null("missing")

    def test_get_mut_returns_live_value(self):
        """Mutating the value from get_mut should change the container."""
        fm = make({"tags": ["a"]})
        fm.get_mut("tags").items.append(String("b"))
        assert fm.get("tags") == Array([String("a"), String("b")])

    def test_clear(self):
        """clear should remove everything."""
        fm = make({"a": 1, "b": 2})
        fm.clear()
        assert fm.is_empty()
        assert len(fm) == 0

    def test_reserve(self):
        """reserve should accept a capacity hint and reject negatives."""
        fm = Frontmatter()
        fm.reserve(10)
        assert fm.is_empty()
        with pytest.raises(ValueError):
            fm.reserve(-1)

    def test_insertion_order(self):
        """Keys should iterate in insertion order; overwrites keep position."""
        fm = Frontmatter()
        for key in ("z", "a", "m"):
            fm.insert(key, key)
        fm.insert("z", "again")
        assert list(fm) == ["z", "a", "m"]
        assert list(fm.keys()) == ["z", "a", "m"]

    def test_dunder_access(self):
        """Item access should mirror insert/get/remove."""
        fm = Frontmatter()
        fm["a"] = 1
        assert fm["a"] == Number(1)
        del fm["a"]
        with pytest.raises(KeyError):
            fm["a"]


class TestMerge:
    """Tests for Frontmatter.merge."""

    def test_merge_literal_case(self):
        """Nested objects should merge; other keys follow the source."""
        target = make({"a": 1, "b": {"y": 2}, "c": 3})
        source = make({"a": 1, "b": {"x": 1}})

        target.merge(source)

        assert target == make({"a": 1, "b": {"x": 1, "y": 2}, "c": 3})

    def test_source_wins_for_non_objects(self):
        """A scalar in the source should replace an object in the target."""
        target = make({"a": {"x": 1}, "b": [1]})
        target.merge(make({"a": "flat", "b": [2, 3]}))
        assert target.get("a") == String("flat")
        assert target.get("b") == Array([Number(2), Number(3)])

    def test_merge_copies_source_values(self):
        """The merged container must not share nodes with the source."""
        source = make({"tags": ["a"]})
        target = Frontmatter()
        target.merge(source)

        source.get_mut("tags").items.append(String("b"))

        assert target.get("tags") == Array([String("a")])

    def test_merge_adds_new_keys_at_end(self):
        """Keys only in the source should be appended."""
        target = make({"a": 1})
        target.merge(make({"b": None}))
        assert list(target) == ["a", "b"]
        assert target.get("b") == Null()


class TestConversion:
    """Tests for to_dict/from_dict/copy/to_format."""

    def test_to_dict_round_trip(self):
        """to_dict should return plain data."""
        data = {"title": "x", "n": 1.0, "nested": {"ok": True}, "list": [None]}
        assert make(data).to_dict() == data

    def test_copy_is_deep(self):
        """copy should not share nested nodes."""
        fm = make({"nested": {"a": 1}})
        clone = fm.copy()
        clone.get_mut("nested").as_object().insert("a", 2)
        assert fm.get("nested").as_object().get("a") == Number(1)

    def test_equality(self):
        """Containers compare by content."""
        assert make({"a": 1}) == make({"a": 1.0})
        assert make({"a": 1}) != make({"a": 2})

    def test_to_format(self):
        """to_format should delegate to the serialisers."""
        assert make({"a": 1}).to_format(Format.JSON) == '{"a":1}'

    def test_str_sorts_keys(self):
        """str() renders sorted keys."""
        fm = make({"b": 1, "a": Object(make({"c": "x"}))})
        assert str(fm) == '{"a": {"c": "x"}, "b": 1}'
