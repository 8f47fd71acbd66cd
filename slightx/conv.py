"""Integer to text conversion in an arbitrary base."""

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_U64_MASK = (1 << 64) - 1


def itoa(value, base):
    """Render ``value`` as an unsigned 64-bit integer in ``base``.

    Digits above nine are lower-case letters. A base outside 2..36 gives an
    empty string. Values outside the 64-bit range wrap around.
    """
    if base < 2 or base > 36:
        return ""

    n = value & _U64_MASK
    if n == 0:
        return "0"

    digits = []
    while n:
        n, rem = divmod(n, base)
        digits.append(_DIGITS[rem])
    return "".join(reversed(digits))