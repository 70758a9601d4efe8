"""
Tests for Decoder.
"""
from datetime import timedelta
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import List, Set, Tuple

import pytest
from pydantic import BaseModel

from dynamic_property import Byte, ConverterNotFoundError, Decoder, Long, ParseError, Short


class Color(Enum):
    RED = "r"
    GREEN = "g"


class Endpoint(BaseModel):
    host: str
    port: int = 80


@pytest.fixture
def decoder():
    return Decoder()


class TestScalars:
    def test_string(self, decoder):
        assert decoder.decode(str, "abc") == "abc"
        assert decoder.decode(str, 5) == "5"
        assert decoder.decode(str, True) == "true"

    @pytest.mark.parametrize("raw", ["true", "TRUE", "yes", "on", "1", True, 1])
    def test_bool_true(self, decoder, raw):
        assert decoder.decode(bool, raw) is True

    @pytest.mark.parametrize("raw", ["false", "No", "off", "0", False, 0])
    def test_bool_false(self, decoder, raw):
        assert decoder.decode(bool, raw) is False

    def test_bool_invalid(self, decoder):
        with pytest.raises(ParseError):
            decoder.decode(bool, "maybe")

    def test_int(self, decoder):
        assert decoder.decode(int, " 42 ") == 42
        assert decoder.decode(int, 7) == 7
        assert decoder.decode(int, 3.0) == 3
        with pytest.raises(ParseError):
            decoder.decode(int, "4.5")
        with pytest.raises(ParseError):
            decoder.decode(int, True)

    def test_integer_widths(self, decoder):
        assert decoder.decode(Byte, "127") == 127
        assert decoder.decode(Short, "-32768") == -32768
        assert decoder.decode(Long, str(2 ** 63 - 1)) == 2 ** 63 - 1
        with pytest.raises(ParseError):
            decoder.decode(Byte, "128")
        with pytest.raises(ParseError):
            decoder.decode(Short, "70000")
        with pytest.raises(ParseError):
            decoder.decode(Long, str(2 ** 63))

    def test_float_decimal(self, decoder):
        assert decoder.decode(float, "1.5") == 1.5
        assert decoder.decode(Decimal, "0.10") == Decimal("0.10")
        with pytest.raises(ParseError):
            decoder.decode(Decimal, "ten")

    def test_path_and_timedelta(self, decoder):
        assert decoder.decode(Path, "/tmp/x") == Path("/tmp/x")
        assert decoder.decode(timedelta, "90") == timedelta(seconds=90)

    def test_enum(self, decoder):
        assert decoder.decode(Color, "RED") is Color.RED
        assert decoder.decode(Color, "green") is Color.GREEN
        assert decoder.decode(Color, "r") is Color.RED
        with pytest.raises(ParseError):
            decoder.decode(Color, "BLUE")


class TestCollections:
    def test_list_split_and_typed(self, decoder):
        assert decoder.decode(List[int], "1, 2,3") == [1, 2, 3]
        assert decoder.decode(List[str], "a,,b") == ["a", "b"]
        assert decoder.decode(list, "a,b") == ["a", "b"]

    def test_list_from_sequence(self, decoder):
        assert decoder.decode(List[int], [1, "2"]) == [1, 2]

    def test_set(self, decoder):
        assert decoder.decode(Set[str], "a,b,a") == {"a", "b"}

    def test_tuples(self, decoder):
        assert decoder.decode(Tuple[int, ...], "1,2") == (1, 2)
        assert decoder.decode(Tuple[str, int], "a,1") == ("a", 1)
        with pytest.raises(ParseError):
            decoder.decode(Tuple[str, int], "a")

    def test_custom_delimiter(self):
        assert Decoder(list_delimiter="|").decode(List[str], "a|b,c") == ["a", "b,c"]

    def test_bad_item(self, decoder):
        with pytest.raises(ParseError):
            decoder.decode(List[int], "1,x")


class TestExtension:
    def test_pydantic_model(self, decoder):
        endpoint = decoder.decode(Endpoint, '{"host": "h", "port": 8080}')
        assert endpoint == Endpoint(host="h", port=8080)
        assert decoder.decode(Endpoint, {"host": "x"}).port == 80
        with pytest.raises(ParseError):
            decoder.decode(Endpoint, '{"port": 1}')

    def test_unsupported_type(self, decoder):
        class Unknown:
            pass

        with pytest.raises(ConverterNotFoundError):
            decoder.decode(Unknown, "x")
        assert not decoder.supports(Unknown)

    def test_register(self, decoder):
        class Version:
            def __init__(self, text):
                self.parts = tuple(int(p) for p in text.split("."))

        decoder.register(Version, Version)
        assert decoder.decode(Version, "1.2.3").parts == (1, 2, 3)
        with pytest.raises(ParseError):
            decoder.decode(Version, "1.x")
