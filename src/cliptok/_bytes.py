"""
Byte-level codec between raw bytes and a printable unicode alphabet.

BPE tables are written over printable characters only, so every byte gets a
stand-in: printable Latin-1 bytes stand for themselves and the rest (control
characters, space, a few Latin-1 gaps) are shifted to code points from 256
upwards. The mapping is fixed; changing it changes every token id.
"""

from typing import Final


def bytes_to_unicode() -> dict[int, str]:
    """Return the byte -> character bijection in vocabulary id order."""
    bs = (
        list(range(ord("!"), ord("~") + 1))
        + list(range(ord("¡"), ord("¬") + 1))
        + list(range(ord("®"), ord("ÿ") + 1))
    )
    cs = bs[:]
    n = 0
    for b in range(256):
        if b not in bs:
            bs.append(b)
            cs.append(256 + n)
            n += 1
    return dict(zip(bs, (chr(c) for c in cs)))


BYTE_ENCODER: Final[dict[int, str]] = bytes_to_unicode()
BYTE_DECODER: Final[dict[str, int]] = {c: b for b, c in BYTE_ENCODER.items()}
# the 256 base symbols in the order they receive ids
BYTE_ALPHABET: Final[tuple[str, ...]] = tuple(BYTE_ENCODER.values())


def bytes_to_text(data: bytes) -> str:
    """Render ``data`` as one alphabet character per byte."""
    return "".join(BYTE_ENCODER[b] for b in data)


def text_to_bytes(text: str) -> bytes:
    """
    Invert :func:`bytes_to_text`.

    :raises KeyError: If ``text`` contains a character outside the alphabet.
    """
    return bytes(BYTE_DECODER[c] for c in text)
