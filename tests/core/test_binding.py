"""
Tests for core.binding — populating dataclasses from a document.
"""
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

import pytest

from core import BindingError, populate
from core.binding import candidate_keys
from infrastructure import load_mapping


@dataclass
class Credentials:
    xing_ming: str = ""


@dataclass
class Server:
    key1: str = field(default="", metadata={"prop": "key1-alias"})
    key2: bool = False
    key3: Optional[bool] = None


@dataclass
class Settings:
    server: Server = field(default_factory=Server)
    credentials: Optional[Credentials] = None
    foo_bar: Optional[str] = None
    ni_hao: timedelta = timedelta(0)
    ta_hao: Optional[timedelta] = None
    yy: str = ""
    order_price: int = 0
    order_items: int = 0
    hello_world: Optional[int] = None
    ratio: float = 0.0
    untouched: list = field(default_factory=list)


@dataclass
class NeedsArgs:
    required: str


@dataclass
class Holder:
    inner: Optional[NeedsArgs] = None


@dataclass
class OnlyDuration:
    ni_hao: timedelta = timedelta(0)


@pytest.fixture
def doc():
    return load_mapping({
        "key1-alias": "value1",
        "key2": "yes",
        "key3": "true",
        "XingMing": "kongrong",
        "foo-bar": "foobar",
        "NI-HAO": "10s",
        "ta-hao": "1m30s",
        "ORDER_PRICE": "100",
        "order_items": "10",
        "HelloWorld": "10",
        "ratio": "0.25",
        "untouched": "ignored",
    })


class TestPopulate:

    def test_full_binding(self, doc):
        settings = populate(doc, Settings())
        assert settings == Settings(
            server=Server(key1="value1", key2=True, key3=True),
            credentials=Credentials(xing_ming="kongrong"),
            foo_bar="foobar",
            ni_hao=timedelta(seconds=10),
            ta_hao=timedelta(seconds=90),
            yy="",
            order_price=100,
            order_items=10,
            hello_world=10,
            ratio=0.25,
            untouched=[],
        )

    def test_returns_same_instance(self, doc):
        target = Settings()
        assert populate(doc, target) is target

    def test_missing_keys_keep_current_values(self):
        settings = populate(load_mapping({}), Settings(yy="keep", order_price=5))
        assert settings.yy == "keep"
        assert settings.order_price == 5

    def test_field_name_takes_priority_over_tag(self):
        doc = load_mapping({"key1": "by-name", "key1-alias": "by-tag"})
        assert populate(doc, Server()).key1 == "by-name"

    def test_custom_tag(self):
        @dataclass
        class Tagged:
            name: str = field(default="", metadata={"cfg": "app.name"})

        doc = load_mapping({"app.name": "demo"})
        assert populate(doc, Tagged(), tag="cfg").name == "demo"
        assert populate(doc, Tagged()).name == ""

    def test_loose_bool(self):
        doc = load_mapping({"key2": "ON"})
        assert populate(doc, Server()).key2 is True
        doc = load_mapping({"key2": "nope"})
        assert populate(doc, Server(key2=True)).key2 is False


class TestPopulateErrors:

    def test_class_instead_of_instance(self, doc):
        with pytest.raises(BindingError):
            populate(doc, Settings)

    def test_non_dataclass(self, doc):
        with pytest.raises(BindingError):
            populate(doc, 42)

    def test_bad_duration(self):
        doc = load_mapping({"NI-HAO": "10x"})
        with pytest.raises(BindingError, match="ni_hao"):
            populate(doc, OnlyDuration())

    def test_bad_int(self):
        doc = load_mapping({"order_price": "cheap"})
        with pytest.raises(BindingError, match="order_price"):
            populate(doc, Settings())

    def test_nested_without_defaults(self):
        with pytest.raises(BindingError, match="inner"):
            populate(load_mapping({}), Holder())


class TestCandidateKeys:

    def test_probe_order(self):
        order_price = next(f for f in Settings.__dataclass_fields__.values()
                           if f.name == "order_price")
        assert candidate_keys(order_price) == [
            "order_price", "orderPrice", "OrderPrice", "ORDER_PRICE",
            "order-price", "ORDER-PRICE",
        ]

    def test_tag_follows_name(self):
        key1 = Server.__dataclass_fields__["key1"]
        assert candidate_keys(key1)[:2] == ["key1", "key1-alias"]
