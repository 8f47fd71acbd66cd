"""A small printf-style formatter producing text chunks."""

from .conv import itoa

_U64_MASK = (1 << 64) - 1


def _to_i64(value):
    value &= _U64_MASK
    return value - (1 << 64) if value >= (1 << 63) else value


def _to_char(value):
    if isinstance(value, str):
        if len(value) != 1:
            raise TypeError("%c requires a single character")
        return value
    return chr(value & 0xFF)


def format_chunks(fmt, *args):
    """Yield the pieces of ``fmt`` formatted with ``args``.

    Supported directives: ``%d`` signed, ``%u`` unsigned, ``%b`` binary,
    ``%x``/``%X`` hexadecimal, ``%p`` pointer, ``%s`` text, ``%c`` character
    and ``%%``. Unknown directives are emitted verbatim; a trailing ``%``
    ends the output with a single ``%``.
    """
    remaining = iter(args)

    def next_arg(directive):
        try:
            return next(remaining)
        except StopIteration:
            raise TypeError(f"not enough arguments for %{directive}") from None

    literal = []
    chars = iter(fmt)
    for c in chars:
        if c != "%":
            literal.append(c)
            continue

        if literal:
            yield "".join(literal)
            literal = []

        d = next(chars, None)
        if d is None:
            yield "%"
            return

        if d == "d":
            ival = _to_i64(next_arg(d))
            if ival < 0:
                yield "-"
            yield itoa(abs(ival), 10)
        elif d == "u":
            yield itoa(next_arg(d), 10)
        elif d == "b":
            value = next_arg(d)
            yield "0b"
            yield itoa(value, 2)
        elif d in ("p", "x", "X"):
            if d == "p":
                yield "*"
            value = next_arg(d)
            yield "0x"
            yield itoa(value, 16)
        elif d == "s":
            yield str(next_arg(d))
        elif d == "c":
            yield _to_char(next_arg(d))
        elif d == "%":
            yield "%"
        else:
            yield "%"
            yield d

    if literal:
        yield "".join(literal)


def format_string(fmt, *args):
    """Return ``fmt`` formatted with ``args`` as one string."""
    return "".join(format_chunks(fmt, *args))