"""
Vocabulary and merge rank tables built from the gzipped CLIP merge list.
"""

import gzip
import logging
import zlib
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from types import MappingProxyType
from collections.abc import Mapping

from ._bytes import BYTE_ALPHABET
from ._constants import (
    END_OF_WORD,
    EOT_TOKEN,
    N_BASE_TOKENS,
    SOT_TOKEN,
    SPECIAL_TOKENS,
    VOCAB_RESOURCE,
    VOCAB_SIZE,
)
from ._decorators import log_duration
from ._sanitise import render_line
from .errors import InitializationError
from .types import Subword, SubwordPair, Token

log = logging.getLogger(__name__)

# byte symbols, their word-final forms and the two special tokens
_N_FIXED_TOKENS = 2 * N_BASE_TOKENS + len(SPECIAL_TOKENS)


@dataclass(frozen=True, slots=True)
class Vocabulary:
    """
    Immutable subword <-> id tables plus merge ranks.

    Ids are laid out as: the 256 byte symbols, the same symbols with the
    end-of-word marker, one entry per merge in rank order, then the start
    and end special tokens.
    """

    encoder: Mapping[Subword, Token]
    decoder: Mapping[Token, Subword]
    ranks: Mapping[SubwordPair, int]

    @property
    def size(self) -> int:
        """Return the number of entries in the vocabulary."""
        return len(self.encoder)

    @property
    def sot_id(self) -> Token:
        return self.encoder[SOT_TOKEN]

    @property
    def eot_id(self) -> Token:
        return self.encoder[EOT_TOKEN]

    def token_to_id(self, subword: Subword) -> Token | None:
        return self.encoder.get(subword)

    def id_to_token(self, token: Token) -> Subword | None:
        return self.decoder.get(token)


def load_vocabulary(
    data: bytes, vocab_size: int = VOCAB_SIZE, *, source: str | None = None
) -> Vocabulary:
    """
    Decompress and parse a gzipped merge list into vocabulary tables.

    The first line is a version header and is skipped. The next
    ``vocab_size - 514`` lines are merges, one ``left right`` pair per line,
    in priority order. Lines past that are ignored.

    :param data: Gzip-compressed UTF-8 merge list.
    :param vocab_size: Exact number of vocabulary entries expected.
    :param source: Name of the resource, used in error messages.
    :return: Fully validated vocabulary.
    :raises InitializationError: If the data cannot be decompressed or decoded,
                                 a merge line is malformed, or the resulting
                                 vocabulary does not have exactly ``vocab_size``
                                 distinct entries.
    """
    n_merges = vocab_size - _N_FIXED_TOKENS
    if n_merges < 0:
        raise InitializationError(
            f"vocab size must be at least {_N_FIXED_TOKENS}",
            resource=source,
            vocab_size=vocab_size,
        )

    try:
        text = gzip.decompress(data).decode("utf-8")
    except (OSError, EOFError, zlib.error) as e:
        raise InitializationError(
            "failed to decompress vocabulary", resource=source
        ) from e
    except UnicodeDecodeError as e:
        raise InitializationError(
            "vocabulary is not valid utf-8", resource=source
        ) from e

    lines = text.split("\n")
    # skip version header
    merge_lines = lines[1 : n_merges + 1]
    if len(merge_lines) < n_merges:
        raise InitializationError(
            f"expected {n_merges} merge lines, found {len(merge_lines)}",
            resource=source,
            vocab_size=vocab_size,
        )

    surplus = len(lines) - 1 - n_merges
    if surplus > 0:
        log.debug(f"ignoring {surplus} lines past the last merge")

    merges: list[SubwordPair] = []
    for idx, line in enumerate(merge_lines):
        parts = line.split()
        if len(parts) != 2:
            raise InitializationError(
                f"merge must be two whitespace-delimited subwords, got {render_line(line)}",
                resource=source,
                # +1 for the header, +1 for 1-based numbering
                line_no=idx + 2,
            )
        merges.append((parts[0], parts[1]))

    log.debug(f"parsed {len(merges)} merge rules")

    # base symbols, then word-final symbols, then merges, then special tokens
    subwords: list[Subword] = list(BYTE_ALPHABET)
    subwords.extend(sym + END_OF_WORD for sym in BYTE_ALPHABET)
    subwords.extend(left + right for left, right in merges)
    subwords.extend(SPECIAL_TOKENS)

    encoder = {subword: tok for tok, subword in enumerate(subwords)}
    if len(encoder) != vocab_size:
        raise InitializationError(
            f"vocabulary has {len(encoder)} distinct entries "
            f"({len(subwords) - len(encoder)} id collisions)",
            resource=source,
            vocab_size=vocab_size,
        )

    # every merge must combine two existing entries, otherwise the merge
    # engine could produce a subword with no id
    for rank, (left, right) in enumerate(merges):
        if left not in encoder or right not in encoder:
            raise InitializationError(
                f"merge refers to an unknown subword: {render_line(f'{left} {right}')}",
                resource=source,
                line_no=rank + 2,
            )

    # a repeated pair would already have collided in the encoder
    ranks = {pair: rank for rank, pair in enumerate(merges)}
    decoder = {tok: subword for subword, tok in encoder.items()}

    log.debug(f"built vocabulary with {len(encoder)} tokens")
    return Vocabulary(
        encoder=MappingProxyType(encoder),
        decoder=MappingProxyType(decoder),
        ranks=MappingProxyType(ranks),
    )


def load_vocabulary_file(
    path: str | Path, vocab_size: int = VOCAB_SIZE
) -> Vocabulary:
    """
    Load vocabulary tables from a gzipped merge list on disk.

    :raises InitializationError: If the file cannot be read or fails validation.
    """
    path = Path(path)
    log.info(f"loading vocabulary from {path}")
    try:
        data = path.read_bytes()
    except OSError as e:
        raise InitializationError(
            "failed to read vocabulary file", resource=str(path)
        ) from e
    return load_vocabulary(data, vocab_size, source=str(path))


def _embedded_resource() -> Traversable:
    return resources.files(__package__).joinpath("data", VOCAB_RESOURCE)


def has_embedded_vocabulary() -> bool:
    """Return whether the packaged vocabulary resource is installed."""
    return _embedded_resource().is_file()


@log_duration(f"embedded vocabulary {VOCAB_RESOURCE}")
def load_embedded_vocabulary() -> Vocabulary:
    """
    Load the CLIP vocabulary shipped inside the package.

    :raises InitializationError: If the resource is missing or fails validation.
    """
    resource = _embedded_resource()
    log.info(f"loading embedded vocabulary {VOCAB_RESOURCE}")
    try:
        data = resource.read_bytes()
    except OSError as e:
        raise InitializationError(
            "embedded vocabulary is missing or unreadable", resource=VOCAB_RESOURCE
        ) from e

    vocab = load_vocabulary(data, VOCAB_SIZE, source=VOCAB_RESOURCE)
    log.info(
        f"vocabulary loaded successfully: {vocab.size} tokens, {len(vocab.ranks)} merge rules"
    )
    return vocab
