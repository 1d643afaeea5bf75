"""Shared fixtures: a small vocabulary in the CLIP merge-list format."""

import gzip

import pytest

import cliptok
from cliptok import factory

HEADER = '"bpe_simple_vocab_16e6.txt#version: 0.2'

# merge ids start at 512, after the byte symbols and their word-final forms
MERGES = [
    "c a",  # 512 ca
    "ca t</w>",  # 513 cat</w>
    "h e",  # 514 he
    "l l",  # 515 ll
    "he ll",  # 516 hell
    "hell o</w>",  # 517 hello</w>
    "t h",  # 518 th
    "th e</w>",  # 519 the</w>
    "' s</w>",  # 520 's</w>
]
SMALL_VOCAB_SIZE = 2 * 256 + len(MERGES) + 2
SOT_ID = SMALL_VOCAB_SIZE - 2
EOT_ID = SMALL_VOCAB_SIZE - 1


def make_resource(lines: list[str], header: str = HEADER) -> bytes:
    """Gzip a merge list the way the CLIP resource is laid out."""
    return gzip.compress(("\n".join([header, *lines]) + "\n").encode("utf-8"))


def base_id(char: str) -> int:
    """Id of a printable ASCII byte symbol."""
    return ord(char) - ord("!")


def final_id(char: str) -> int:
    """Id of the word-final form of a printable ASCII byte symbol."""
    return 256 + base_id(char)


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def small_resource() -> bytes:
    """Return gzipped merge list with a couple of surplus trailing lines."""
    return make_resource(MERGES + ["x y", "q z"])


@pytest.fixture
def small_vocab(small_resource) -> cliptok.Vocabulary:
    """Return vocabulary built from the small merge list."""
    return cliptok.load_vocabulary(small_resource, SMALL_VOCAB_SIZE, source="small")


@pytest.fixture
def tokenizer(small_vocab) -> cliptok.CLIPTokenizer:
    """Return a tokenizer over the small vocabulary."""
    return cliptok.CLIPTokenizer(small_vocab)


@pytest.fixture
def fresh_singleton():
    """Clear the shared tokenizer before and after a test."""
    factory._reset()
    yield
    factory._reset()


@pytest.fixture(scope="session")
def clip_tokenizer() -> cliptok.CLIPTokenizer:
    """Return a tokenizer over the packaged CLIP vocabulary, loaded once."""
    return cliptok.CLIPTokenizer(cliptok.load_embedded_vocabulary())
