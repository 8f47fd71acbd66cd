"""Text helpers: NUL-terminated buffers, checked slicing, searching and splitting."""


def text_from_buffer(buffer):
    """Return the text held in ``buffer`` up to its first NUL byte.

    The whole buffer is used when it holds no NUL. Bytes map one to one
    onto characters (Latin-1).
    """
    data = bytes(buffer)
    if not data:
        raise ValueError("buffer must not be empty")
    end = data.find(b"\0")
    if end != -1:
        data = data[:end]
    return data.decode("latin-1")


def slice_text(text, start, length):
    """Return ``length`` characters of ``text`` beginning at ``start``.

    Raises IndexError when the range does not lie within ``text``.
    """
    if start < 0 or length < 0:
        raise IndexError("start and length must not be negative")
    if start > len(text):
        raise IndexError(f"start {start} beyond end of text ({len(text)})")
    if start + length > len(text):
        raise IndexError(
            f"slice {start}+{length} beyond end of text ({len(text)})"
        )
    return text[start:start + length]


def rfind_char(text, char):
    """Return the index of the last ``char`` in ``text``, or -1."""
    if len(char) != 1:
        raise ValueError("char must be a single character")
    return text.rfind(char)


def split(text, delimiter):
    """Split ``text`` on every occurrence of ``delimiter``.

    An empty text or an empty delimiter gives an empty list. Every position
    is tested for a match, so a delimiter that overlaps a previous match
    raises ValueError.
    """
    if not text or not delimiter:
        return []

    items = []
    start = 0
    width = len(delimiter)
    for i in range(len(text) - width + 1):
        if not text.startswith(delimiter, i):
            continue
        if i < start:
            raise ValueError(
                f"delimiter {delimiter!r} overlaps a previous match at {i}"
            )
        items.append(text[start:i])
        start = i + width

    items.append(text[start:])
    return items