"""RFC 3339 时间戳校验测试。"""

import pytest

from jddf.utils.timestamp import is_rfc3339


@pytest.mark.parametrize(
    "value",
    [
        "1985-04-12T23:20:50.52Z",
        "1996-12-19T16:39:57-08:00",
        "1990-12-31T23:59:60Z",
        "1937-01-01T12:00:27.87+00:20",
        "2020-02-29T00:00:00z",
        "2020-02-29t00:00:00+23:59",
    ],
)
def test_valid_timestamps(value):
    assert is_rfc3339(value)


@pytest.mark.parametrize(
    "value",
    [
        "",
        "1985-04-12",
        "23:20:50Z",
        "1985-04-12 23:20:50Z",
        "1985-04-12T23:20:50",
        "1985-04-12T23:20:50.Z",
        "2019-02-29T00:00:00Z",
        "1985-13-12T23:20:50Z",
        "1985-04-12T24:00:00Z",
        "1985-04-12T23:61:00Z",
        "1985-04-12T23:20:61Z",
        "1985-04-12T23:20:50+24:00",
        "1985-04-12T23:20:50Z\n",
        "١٩٨٥-04-12T23:20:50Z",
    ],
)
def test_invalid_timestamps(value):
    assert not is_rfc3339(value)


@pytest.mark.parametrize("value", [None, 0, 1.5, ["1985-04-12T23:20:50Z"]])
def test_non_strings(value):
    assert not is_rfc3339(value)
