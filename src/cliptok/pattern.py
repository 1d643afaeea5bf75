"""Text normalization and pattern-based pre-tokenization."""

import unicodedata
from collections.abc import Iterator
from typing import Final

import regex as re

# Split pattern of the reference CLIP tokenizer:
# https://github.com/openai/CLIP/blob/main/clip/simple_tokenizer.py
# special tokens first so they survive as single pre-tokens, then
# contractions ahead of generic letter runs; digits are split one by one
# and whitespace is never matched
CLIP_PATTERN: Final[str] = (
    r"<\|startoftext\|>|<\|endoftext\|>|"
    r"'s|'t|'re|'ve|'m|'ll|'d|"
    r"[\p{L}]+|"
    r"[\p{N}]|"
    r"[^\s\p{L}\p{N}]+"
)

CLIP_REGEX: Final[re.Pattern] = re.compile(CLIP_PATTERN, re.IGNORECASE)
_WHITESPACE_RUN = re.compile(r"\s+")


def normalize(text: str) -> str:
    """
    Canonicalize text before segmentation.

    Applies NFC, collapses every whitespace run to a single space, trims both
    ends and lowercases. Normalizing twice gives the same result as once.
    """
    text = unicodedata.normalize("NFC", text)
    text = _WHITESPACE_RUN.sub(" ", text).strip()
    return text.lower()


class PreTokens:
    """Lazy, restartable sequence of the pre-tokens of one text."""

    __slots__ = ("text", "_compiled_pat")

    def __init__(self, text: str, compiled_pat: re.Pattern = CLIP_REGEX) -> None:
        self.text = text
        self._compiled_pat = compiled_pat

    def __iter__(self) -> Iterator[str]:
        # each iteration rescans the text from the start
        for m in self._compiled_pat.finditer(self.text):
            yield m.group(0)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.text!r})"


def segment(text: str, compiled_pat: re.Pattern = CLIP_REGEX) -> PreTokens:
    """
    Split normalized text into pre-tokens.

    Matches are taken greedily left to right; whitespace between matches is
    dropped. ``"a cat"`` yields ``["a", "cat"]``. Empty input yields nothing.
    """
    return PreTokens(text, compiled_pat)
