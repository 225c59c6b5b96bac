"""
Hypothesis property-based tests for properties parse ↔ serialize and
for the structural edit operations.

The core property: for any text made of comment lines, empty lines and
canonical ``key<sep>value`` lines, serializing the parsed document
reproduces the text byte for byte.
"""
from __future__ import annotations

from hypothesis import assume, given, settings
from hypothesis import strategies as st

from core import ChangeType, diff_events
from properties import parse


# ------------------------------------------------------------------
# Strategies
# ------------------------------------------------------------------

# Keys: no separators, no comment leaders at the start, no edge whitespace
_KEY_CHARS = st.sampled_from("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-/ ")
_key = st.text(_KEY_CHARS, min_size=1, max_size=12).filter(
    lambda k: k.strip() == k and k[0] not in "#!"
)

# Values may contain separators and leaders; edges must not be whitespace
_VALUE_CHARS = st.sampled_from("abcdefghijklmnopqrstuvwxyz0123456789=:#! ._-/")
_value = st.text(_VALUE_CHARS, max_size=16).filter(lambda v: v.strip() == v)

_separator = st.sampled_from(["=", ":"])

_COMMENT_CHARS = st.sampled_from("abcdefghijklmnopqrstuvwxyz0123456789=:#! \t")
_comment_line = st.builds(
    lambda indent, leader, body: indent + leader + body,
    st.sampled_from(["", " ", "\t", "  "]),
    st.sampled_from(["#", "!"]),
    st.text(_COMMENT_CHARS, max_size=20),
)

_property_line = st.builds(lambda k, s, v: f"{k}{s}{v}", _key, _separator, _value)

_line = st.one_of(_comment_line, st.just(""), _property_line)


@st.composite
def properties_text(draw: st.DrawFn) -> str:
    lines = draw(st.lists(_line, max_size=15))
    return "".join(line + "\n" for line in lines)


# ------------------------------------------------------------------
# Properties
# ------------------------------------------------------------------


class TestRoundTrip:
    @given(text=properties_text())
    @settings(max_examples=200)
    def test_serialize_of_parse_is_identity(self, text: str):
        assert parse(text).export() == text

    @given(text=properties_text())
    @settings(max_examples=100)
    def test_parse_is_stable(self, text: str):
        once = parse(text).export()
        assert parse(once).export() == once


class TestEdits:
    @given(text=properties_text(), key=_key, value=_value)
    def test_set_then_get(self, text: str, key: str, value: str):
        doc = parse(text)
        doc.set(key, value)
        assert doc.get(key) == value

    @given(text=properties_text(), key=_key)
    def test_delete_missing_is_noop(self, text: str, key: str):
        doc = parse(text)
        assume(key not in doc)
        before = doc.export()
        assert doc.delete(key) is False
        assert doc.export() == before

    @given(text=properties_text(), comment=st.text(st.sampled_from("abc #!\t\n"), max_size=30))
    def test_comment_then_uncomment_restores(self, text: str, comment: str):
        doc = parse(text + "target=1\n")
        doc.uncomment("target")
        before = doc.export()
        assert doc.comment("target", comment)
        assert doc.uncomment("target")
        assert doc.export() == before

    @given(text=properties_text())
    def test_uncomment_is_idempotent(self, text: str):
        doc = parse(text)
        for key in doc.keys():
            doc.uncomment(key)
            once = doc.export()
            doc.uncomment(key)
            assert doc.export() == once

    @given(text=properties_text())
    def test_delete_removes_key(self, text: str):
        doc = parse(text)
        for key in doc.keys():
            assert doc.delete(key) is True
            assert doc.get(key) is None


class TestDiffProperties:
    @given(
        left=st.dictionaries(_key, _value, max_size=8),
        right=st.dictionaries(_key, _value, max_size=8),
    )
    def test_reverse_diff_is_inverse(self, left: dict, right: dict):
        left_doc = parse("".join(f"{k}={v}\n" for k, v in left.items()))
        right_doc = parse("".join(f"{k}={v}\n" for k, v in right.items()))

        forward = {e.key: e for e in diff_events(left_doc, right_doc)}
        backward = {e.key: e for e in diff_events(right_doc, left_doc)}

        assert forward.keys() == backward.keys() == left.keys() | right.keys()
        for key, event in forward.items():
            assert backward[key] == event.inverted()

    @given(
        left=st.dictionaries(_key, _value, max_size=8),
        right=st.dictionaries(_key, _value, max_size=8),
    )
    def test_event_classification(self, left: dict, right: dict):
        left_doc = parse("".join(f"{k}={v}\n" for k, v in left.items()))
        right_doc = parse("".join(f"{k}:{v}\n" for k, v in right.items()))
        for event in diff_events(left_doc, right_doc):
            if event.change_type is ChangeType.ADDED:
                assert event.key not in left
            elif event.change_type is ChangeType.REMOVED:
                assert event.key not in right
            elif event.change_type is ChangeType.SAME:
                assert left[event.key] == right[event.key]
            else:
                assert left[event.key] != right[event.key]
