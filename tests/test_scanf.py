import math

import pytest

from cstringkit.printf import sprintf
from cstringkit.scanf import ScanResult, sscanf


def approx32(value):
    return pytest.approx(value, rel=1e-6)


@pytest.mark.parametrize(
    "text, fmt, expected",
    [
        ("-2147483648", "%d", -2147483648),
        ("2147483647", "%d", 2147483647),
        ("-32768", "%hd", -32768),
        ("32767", "%hd", 32767),
        ("-9223372036854775808", "%ld", -9223372036854775808),
        ("9223372036854775807", "%ld", 9223372036854775807),
        ("0", "%u", 0),
        ("4294967295", "%u", 4294967295),
        ("0", "%ho", 0),
        ("65535", "%ho", 27485),
        ("0", "%lo", 0),
        ("18446744073709551615", "%lo", 1),
        ("0", "%x", 0),
        ("ffffffff", "%x", 4294967295),
        ("A", "%c", "A"),
        ("Hello", "%9s", "Hello"),
        ("Привет", "%9ls", "Привет"),
        ("0x0", "%p", 0),
        ("0xffffffffffffffff", "%p", 18446744073709551615),
    ],
)
def test_min_max_values(text, fmt, expected):
    assert sscanf(text, fmt) == ScanResult(1, [expected])


def test_min_max_floats():
    result = sscanf("-3.4e38", "%f")
    assert result.count == 1
    assert result.values[0] == approx32(-3.4e38)

    result = sscanf("-1.1e4932", "%Lf")
    assert result.count == 1
    assert math.isinf(result.values[0]) and result.values[0] < 0


def test_width_then_count():
    assert sscanf("12345", "%3d%n") == ScanResult(1, [123, 3])


def test_d_i():
    assert sscanf("123 -456 [phone] 34", "%d %d %d %d %d %d") == ScanResult(2, [123, -456])
    assert sscanf("100 +200 -300", "%i %i %i") == ScanResult(3, [100, 200, -300])
    assert sscanf("2147483647 -2147483648 0", "%d %d %d") == ScanResult(
        3, [2147483647, -2147483648, 0]
    )


def test_i_detects_base():
    assert sscanf("0x1A 017 9", "%i %i %i") == ScanResult(3, [26, 15, 9])


def test_length_modifiers():
    result = sscanf("1234567890 -12345 4294967295 65535", "%ld %hd %lu %hu")
    assert result == ScanResult(4, [1234567890, -12345, 4294967295, 65535])

    edge = sprintf("%ld %hd", -9223372036854775808, 32767)
    assert sscanf(edge, "%ld %hd") == ScanResult(2, [-9223372036854775808, 32767])

    edge = sprintf("%lu %hu", 18446744073709551615, 65535)
    assert sscanf(edge, "%lu %hu") == ScanResult(2, [18446744073709551615, 65535])


def test_uoxX():
    assert sscanf("4294967295 65 ff FF", "%u %o %x %X") == ScanResult(4, [4294967295, 53, 255, 255])
    assert sscanf("0x7f 0XFF 077", "%x %X %o") == ScanResult(3, [127, 255, 63])


def test_fegG():
    text = "3.14 -0.0 inf nan +infinity 1.23e-5 1.23e+8 12345.6789"
    result = sscanf(text, "%10f %f %f %f %f %f %f %f")
    assert result.count == 8
    f1, f2, f3, f4, f5, g1, g2, g3 = result.values
    assert f1 == approx32(3.14)
    assert f2 == 0.0 and math.copysign(1.0, f2) < 0
    assert math.isinf(f3) and f3 > 0
    assert math.isnan(f4)
    assert math.isinf(f5) and f5 > 0
    assert g1 == approx32(1.23e-5)
    assert g2 == approx32(1.23e8)
    assert g3 == approx32(12345.6789)


def test_scientific_notation():
    result = sscanf("1.23e-10 1.23E+10 -2.5e5", "%e %E %g")
    assert result.count == 3
    assert result.values == [approx32(1.23e-10), approx32(1.23e10), approx32(-2.5e5)]


def test_long_double():
    result = sscanf("3.14159265358979323846 2.71828182845904523536", "%20Lf %Lf")
    assert result.count == 2
    assert abs(result.values[0] - 3.14159265358979323846) < 1e-10
    assert result.values[1] == 46.0


def test_long_double_keeps_double_precision():
    assert sscanf("0.1", "%Lf").values == [0.1]
    single = sscanf("0.1", "%f").values[0]
    assert single == approx32(0.1) and single != 0.1


def test_cs():
    assert sscanf("A Hello World", "%*c %99s %99s") == ScanResult(2, ["Hello", "World"])
    assert sscanf("1234567890", "%4s") == ScanResult(1, ["1234"])
    assert sscanf("", "%c %s") == ScanResult(-1, [])


def test_char_width():
    assert sscanf("abcdef", "%3c%c") == ScanResult(2, ["abc", "d"])


def test_lc_ls():
    result = sscanf("Ж € 😊 ДлиннаяСтрока", "%lc %lc %lc %99ls")
    assert result == ScanResult(4, ["Ж", "€", "😊", "ДлиннаяСтрока"])


def test_p():
    text = sprintf("%p %p %s", 0x7FFD1234, None, "0x0")
    assert sscanf(text, "%p %p %p") == ScanResult(3, [0x7FFD1234, 0, 0])


def test_n():
    assert sscanf("12345", "%d%n%n") == ScanResult(1, [12345, 5, 5])
    assert sscanf("12345 67890", "%*d%ln %*d%hn") == ScanResult(0, [5, 11])


def test_n_counts_utf8_bytes():
    assert sscanf("Жx", "%c%n") == ScanResult(1, ["Ж", 2])


def test_percent():
    assert sscanf("100% 50% X", "%d%% %d%% %c") == ScanResult(3, [100, 50, "X"])


def test_assignment_suppression():
    result = sscanf("123 3.14 Hello", "%*d %f %*s")
    assert result.count == 1
    assert result.values == [approx32(3.14)]

    result = sscanf("1 2 3 4 5 6 7 8 ", "%*d %d %*d %d %*d %f %*d %99s")
    assert result == ScanResult(4, [2, 4, 6.0, "8"])


def test_empty_input():
    assert sscanf("", "%d") == ScanResult(-1, [])
    assert sscanf("123abc", "%d%c") == ScanResult(2, [123, "a"])
    assert sscanf("abc123", "%d") == ScanResult(0, [])


def test_empty_format():
    assert sscanf("123", "") == ScanResult(-1, [])


def test_overflow():
    assert sscanf("HelloWorld", "%4s") == ScanResult(1, ["Hell"])
    result = sscanf("99999999999999999999", "%hd")
    assert result.count == 1
    assert -32768 <= result.values[0] <= 32767


def test_complex_format():
    result = sscanf("25 Dec 2023 3.14,X", "%d %99s %d %f,%c")
    assert result.count == 5
    assert result.values == [25, "Dec", 2023, approx32(3.14), "X"]

    assert sscanf("1234-56.78-ABC", "%2d-%4f-%99s") == ScanResult(1, [12])


def test_malformed_format():
    assert sscanf("123 456", "%d").count == 1
    assert sscanf("123 456", "%d %*d") == ScanResult(1, [123])