import math

import pytest

from jqtree.types import type_of


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "null"),
        (False, "boolean"),
        (True, "boolean"),
        (0, "number"),
        (3.14, "number"),
        (math.nan, "number"),
        (math.inf, "number"),
        (-math.inf, "number"),
        (10, "number"),
        (2**80, "number"),
        ("string", "string"),
        ([], "array"),
        ({}, "object"),
    ],
)
def test_type_of(value, expected):
    assert type_of(value) == expected


def test_type_of_invalid():
    with pytest.raises(TypeError, match=r"^invalid type: tuple \(\(0,\)\)$"):
        type_of((0,))