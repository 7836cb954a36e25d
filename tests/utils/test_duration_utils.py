import pytest

from sitecheck.utils.duration_utils import parse_duration


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2s", 2.0),
        ("500ms", 0.5),
        ("1m30s", 90.0),
        ("1.5h", 5400.0),
        ("250us", 0.00025),
        ("0", 0.0),
        ("3", 3.0),
        ("0.25", 0.25),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", ["", "abc", "10x", "-1", "-1s", "s", "inf", "1s garbage"])
def test_parse_duration_rejects_invalid(value):
    with pytest.raises(ValueError):
        parse_duration(value)
