import pytest

from knightofashes.textutil import format_printf, getnbr, strtok


@pytest.mark.parametrize(
    "text, expected",
    [
        ("42", 42),
        ("abc-7x", -7),
        ("level 3", 3),
        ("", 0),
        ("none", 0),
        ("-0", 0),
    ],
)
def test_getnbr_basic(text, expected):
    assert getnbr(text) == expected


def test_getnbr_minus_only_counts_before_one_to_eight():
    assert getnbr("-9") == 9
    assert getnbr("-5") == -5


def test_getnbr_limit_gives_zero():
    assert getnbr("2147483647") == 0
    assert getnbr("-2147483647") == 0
    assert getnbr("2147483646") == 2147483646


def test_getnbr_stops_at_first_non_digit():
    assert getnbr("12ab34") == 12


def test_strtok_drops_empty_tokens():
    assert strtok("a,,b,", ",") == ["a", "b"]
    assert strtok(",,,", ",") == []
    assert strtok("", "\n") == []


@pytest.mark.parametrize("tokens", [["one"], ["a", "bb", "ccc"], ["x y", "z"]])
def test_strtok_round_trip(tokens):
    assert strtok("\n".join(tokens), "\n") == tokens
    assert strtok("\n\n" + "\n\n".join(tokens) + "\n", "\n") == tokens


def test_format_decimal_and_strings():
    assert format_printf("%d-%i", 12, -3) == "12--3"
    assert format_printf("hello %s!", "knight") == "hello knight!"
    assert format_printf("%c%c", "o", ord("k")) == "ok"


def test_format_decimal_wraps_to_32_bits():
    assert format_printf("%d", 2**31) == str(-(2**31))
    assert format_printf("%u", -1) == str(2**32 - 1)


@pytest.mark.parametrize("number", [1, 7, 255, 4096, 123456])
def test_format_bases_match_builtin(number):
    assert format_printf("%x", number) == format(number, "x")
    assert format_printf("%X", number) == format(number, "X")
    assert format_printf("%o", number) == format(number, "o")
    assert format_printf("%b", number) == format(number, "b")
    assert format_printf("%p", number) == "0x" + format(number, "x")
    assert format_printf("%S", number) == "\\" + format(number, "o")


def test_format_zero_in_other_bases_is_empty():
    assert format_printf("[%x][%o][%b]", 0, 0, 0) == "[][][]"


def test_format_percent_and_unknown():
    assert format_printf("100%%") == "100%"
    assert format_printf("%q") == "%q"
    assert format_printf("end%") == "end%"
    assert format_printf("%%d", 5) == "%d"


def test_format_missing_argument_raises():
    with pytest.raises(TypeError):
        format_printf("%d and %d", 1)