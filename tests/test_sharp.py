import pytest

from cstringkit.sharp import insert, to_lower, to_upper, trim


@pytest.mark.parametrize(
    "source, expected",
    [
        ("Hello, world!", "HELLO, WORLD!"),
        ("ALREADY UPPER", "ALREADY UPPER"),
        ("", ""),
        ("abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"),
        ("_?};!234", "_?};!234"),
        (None, None),
    ],
)
def test_to_upper(source, expected):
    assert to_upper(source) == expected


def test_to_upper_leaves_non_ascii():
    assert to_upper("aßж") == "Aßж"


@pytest.mark.parametrize(
    "source, expected",
    [
        ("hELLO, WORLD!", "hello, world!"),
        ("\nH\t\\G123123", "\nh\t\\g123123"),
        ("already lower", "already lower"),
        ("", ""),
        ("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"),
        ("_?};!234", "_?};!234"),
        (None, None),
    ],
)
def test_to_lower(source, expected):
    assert to_lower(source) == expected


@pytest.mark.parametrize(
    "source, text, index, expected",
    [
        ("hello, world!", "hELLO, WORLD!", 7, "hello, hELLO, WORLD!world!"),
        (None, "", 0, None),
        ("abcdefghij", "'I WAS HERE'", 3, "abc'I WAS HERE'defghij"),
        (None, None, 0, None),
        ("", "", 0, ""),
        ("wtf", None, 0, None),
        ("", None, 0, None),
        ("abc", "333", 3, "abc333"),
    ],
)
def test_insert(source, text, index, expected):
    assert insert(source, text, index) == expected


@pytest.mark.parametrize(
    "source, text, index",
    [
        ("", "", 7),
        ("abc", "333", 10),
        ("hello, world!", "hELLO, WORLD!", -1),
    ],
)
def test_insert_out_of_range(source, text, index):
    with pytest.raises(ValueError):
        insert(source, text, index)


@pytest.mark.parametrize(
    "source, chars, expected",
    [
        ("-?hello, world!", "!?-", "hello, world"),
        ("MAF MAF", "MAF MAF", ""),
        (None, "", None),
        ("!!!abcdefghij!?!", "!?", "abcdefghij"),
        ("abc", "", "abc"),
        ("hello, world!", "?!", "hello, world"),
        (None, None, None),
        ("", "", ""),
        (" wtf ", None, " wtf "),
        (" wtf ", "", " wtf "),
    ],
)
def test_trim(source, chars, expected):
    assert trim(source, chars) == expected