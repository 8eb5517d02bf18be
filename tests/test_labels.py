import random

import pytest

from nodeops.kube.labels import (
    must_to_int,
    normalize_metadata,
    to_integer_value,
    to_label_key,
    to_name,
)
from nodeops.kube.objects import ObjectMeta


@pytest.mark.parametrize(
    "value, want",
    [
        ("hub-0", "hub-0"),
        ("", ""),
        ("HUB!@+=_.0", "HUB_.0"),
        (
            "abcde^&*" * 60 + "-suffix",
            "abcdeabcdeabcdeabcdeabcdeabcdeaabcdeabcdeabcdeabcdeabcde-suffix",
        ),
        ("#..abc1-_@!", "abc1"),
    ],
)
def test_to_label_key(value, want):
    got = to_label_key(value)
    assert len(got) <= 63
    assert got == want


@pytest.mark.parametrize(
    "value, want",
    [
        ("hub-0", "hub-0"),
        ("", ""),
        ("HUB!@+=_.0", "HUB.0"),
        (
            "abcde^&*" * 100 + "-suffix",
            "abcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeaabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcdeabcde-suffix",
        ),
        ("#..abc2-_@!", "abc2"),
    ],
)
def test_to_name(value, want):
    got = to_name(value)
    assert len(got) <= 253
    assert got == want


def test_to_integer_value():
    assert to_integer_value(123) == "123"
    assert to_integer_value(-1) == "-1"


def test_to_integer_value_rejects_non_integers():
    with pytest.raises(TypeError):
        to_integer_value(1.5)


def test_must_to_int():
    assert must_to_int(to_integer_value(123)) == 123

    n = random.Random().randrange(1000)
    assert must_to_int(f"{n}") == n


@pytest.mark.parametrize("bad", ["", "1.2", "1-2"])
def test_must_to_int_bad_values(bad):
    with pytest.raises(ValueError):
        must_to_int(bad)


def test_must_to_int_out_of_range():
    with pytest.raises(ValueError):
        must_to_int(str(2**63))


def _require_valid_metadata(meta):
    assert 0 < len(meta.name) <= 253
    for key, value in {**meta.labels, **meta.annotations}.items():
        assert len(key) <= 63
        assert len(value) <= 63


def test_normalize_metadata():
    meta = ObjectMeta(
        name=" name " * 500,
        annotations={
            "annot-key" * 500: "value" * 500,
            "cloud.google.com/neg": '{"ingress": true}',
        },
        labels={"label-key" * 500: "value" * 500},
    )

    normalize_metadata(meta)

    _require_valid_metadata(meta)
    assert meta.annotations["cloud.google.com/neg"] == '{"ingress": true}'
    assert len(meta.labels) == 1