"""cliptok: CLIP-compatible byte-level BPE tokenization."""

from ._bytes import bytes_to_text, text_to_bytes
from ._constants import CONTEXT_LENGTH, VOCAB_SIZE
from .errors import CLIPTokError, InitializationError, TokenizationError
from .factory import count, encode, get_tokenizer
from .pattern import CLIP_PATTERN, normalize, segment
from .tokenizer import CLIPTokenizer
from .vocab import (
    Vocabulary,
    has_embedded_vocabulary,
    load_embedded_vocabulary,
    load_vocabulary,
    load_vocabulary_file,
)

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cliptok")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "encode",
    "count",
    "get_tokenizer",
    "CLIPTokenizer",
    "Vocabulary",
    "load_vocabulary",
    "load_vocabulary_file",
    "load_embedded_vocabulary",
    "has_embedded_vocabulary",
    "CLIP_PATTERN",
    "normalize",
    "segment",
    "bytes_to_text",
    "text_to_bytes",
    "CLIPTokError",
    "InitializationError",
    "TokenizationError",
    "VOCAB_SIZE",
    "CONTEXT_LENGTH",
]
