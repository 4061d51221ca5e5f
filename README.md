# cstringkit

C-style string formatting and scanning for Python, plus a few small string
helpers.

- `cstringkit.printf.sprintf(format, *args)` formats values with a
  printf-style format string and returns the result.
- `cstringkit.scanf.sscanf(string, format)` reads values from a string with
  a scanf-style format and returns a `ScanResult`.
- `cstringkit.errors.strerror(errnum, platform=None)` gives the standard
  message for an error number as the Linux or macOS C library words it.
- `cstringkit.sharp` has `to_upper`, `to_lower`, `insert` and `trim`.

The package is a library only: it has no command-line program.

## Installation

```
pip install cstringkit
```

## Formatting

```python
from cstringkit.printf import Ref, sprintf

sprintf("%+5d|%-6.2f|%.3s", 73, 9.8765, "comb")   # '  +73|9.88  |com'
sprintf("%#8.6x", 1234)                            # '0x0004d2'
sprintf("%.6g", 0.000123456789)                    # '0.000123457'
sprintf("%p", None)                                # '(nil)'

count = Ref()
sprintf("Test%n done", count)
count.value                                        # 4
```

Supported are the flags `- + space 0 #`, a width and a precision (either may
be `*`, taking an integer argument; a negative `*` width left-justifies, a
negative `*` precision is ignored), the length modifiers `h`, `l`, `ll`, `L`,
and the conversions `c s d i u o x X p f e E g G n %%`.

- Integers wrap to 32 bits, or to 64 bits with `l`/`ll`, as C's `int` and
  `long` would.
- `%c` takes a one-character string or an integer code.
- `%n` stores the number of bytes written so far into the `Ref` passed for
  it (`None` is accepted and ignored). Widths, precisions of `%s` and the
  `%n` count are measured in UTF-8 bytes.
- Too few arguments raise `TypeError`, as does an argument of the wrong kind.

## Scanning

```python
from cstringkit.scanf import sscanf

result = sscanf("25 Dec 2023 3.14,X", "%d %99s %d %f,%c")
result.count        # 5
result.values[:3]   # [25, 'Dec', 2023]
result.values[4]    # 'X'
```

`ScanResult.count` is the number of successful assignments, as C's `sscanf`
returns it; an empty input or an empty format gives `-1`. `ScanResult.values`
holds every stored value in order, including the counts written by `%n`
(which are not added to `count`). Conversions suppressed with `*` consume
input but store nothing.

Points to know:

- `%s` reads at most its field width, so give it one (`%99s`); without a
  width it stores an empty string.
- `%c` reads one character, or as many as its width.
- `%f`, `%e`, `%g` results are rounded to single precision unless `L` is
  given; `inf`, `infinity` and `nan` are recognised.
- Integers are truncated to 16 bits with `h`, 64 with `l`, 32 otherwise;
  `u o x X` store unsigned values. `%i` detects `0x` and `0` prefixes.
- `%p` stores an integer; `0x0` and `(nil)` read as 0.
- `%n` stores how many UTF-8 bytes of the input had been consumed.

## Error messages

```python
from cstringkit.errors import strerror

strerror(2, "linux")    # 'No such file or directory'
strerror(-1, "linux")   # 'Unknown error -1'
strerror(-1, "darwin")  # 'Unknown error: -1'
```

`platform` is `"linux"` or `"darwin"`; by default it follows the running
system (macOS gives `"darwin"`, anything else `"linux"`). Any other value
raises `ValueError`.

## String helpers

```python
from cstringkit.sharp import insert, to_lower, to_upper, trim

to_upper("Hello, world!")                 # 'HELLO, WORLD!'
to_lower("hELLO")                         # 'hello'
insert("abcdefghij", "'I WAS HERE'", 3)   # "abc'I WAS HERE'defghij"
trim("-?hello, world!", "!?-")            # 'hello, world'
```

Only ASCII letters change case. Each helper returns `None` when given `None`
for its source string (and `insert` also when the inserted text is `None`).
`insert` raises `ValueError` when the index is negative or past the end of
the source. `trim` returns the source unchanged when the set of characters is
`None` or empty.

## Running the tests

```
pip install -e ".[test]"
pytest
```