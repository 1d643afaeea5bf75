"""CLIP byte-level BPE tokenizer."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from math import ceil
from typing import Callable, TypeVar

from ._bpe import bpe
from ._bytes import bytes_to_text
from ._cache import MergeCache
from ._constants import END_OF_WORD, SPECIAL_TOKENS
from .errors import TokenizationError
from .pattern import CLIP_REGEX, normalize, segment
from .types import Subword, Token, Word
from .vocab import Vocabulary

T = TypeVar("T")

log = logging.getLogger(__name__)


class CLIPTokenizer:
    """
    Tokenizer that normalizes and splits text, then applies CLIP BPE merges.

    The vocabulary tables are read-only; the only state that changes after
    construction is the merge cache, which only grows. A single instance can
    be shared by any number of threads.
    """

    def __init__(self, vocab: Vocabulary) -> None:
        """Initialize tokenizer over a loaded vocabulary."""
        self.vocab = vocab
        self.compiled_pat = CLIP_REGEX
        # special tokens matched in the text are already whole subwords
        self._cache = MergeCache({seq: (seq,) for seq in SPECIAL_TOKENS})

    @property
    def sot_id(self) -> Token:
        return self.vocab.sot_id

    @property
    def eot_id(self) -> Token:
        return self.vocab.eot_id

    def encode(self, text: str, add_special_tokens: bool = True) -> list[Token]:
        """
        Encode text into a sequence of tokens.

        The result is never truncated; fitting it into a model's context
        window is up to the caller.

        :param text: Text to encode. Any string is accepted.
        :param add_special_tokens: Frame the ids with the start and end tokens.
        :returns: Encoded token sequence.
        :raises TokenizationError: If a merged subword has no id (internal defect).
        """
        encoder = self.vocab.encoder
        tokens: list[Token] = [self.sot_id] if add_special_tokens else []

        for pretoken in segment(normalize(text), self.compiled_pat):
            for subword in self._merge(pretoken):
                try:
                    tokens.append(encoder[subword])
                except KeyError as e:
                    raise TokenizationError(
                        "merged subword missing from vocabulary, kindly report issue",
                        subword=subword,
                    ) from e

        if add_special_tokens:
            tokens.append(self.eot_id)
        return tokens

    def count(self, text: str, add_special_tokens: bool = True) -> int:
        """Return ``len(self.encode(text))`` without building the id list."""
        n = 2 if add_special_tokens else 0
        for pretoken in segment(normalize(text), self.compiled_pat):
            n += len(self._merge(pretoken))
        return n

    def tokenize(self, text: str) -> list[Subword]:
        """Return the merged subword strings of ``text``, without special tokens."""
        subwords: list[Subword] = []
        for pretoken in segment(normalize(text), self.compiled_pat):
            subwords.extend(self._merge(pretoken))
        return subwords

    def encode_batch(
        self,
        texts: list[str],
        add_special_tokens: bool = True,
        num_workers: int | None = None,
    ) -> list[list[Token]]:
        """
        Encode many texts on a thread pool, preserving input order.

        :param texts: Text inputs to encode.
        :param add_special_tokens: Frame each sequence with start and end tokens.
        :param num_workers: Thread count; ``None`` uses the CPU count.
        :returns: Encoded token sequences in input order.
        """
        return self._map_batch(
            lambda text: self.encode(text, add_special_tokens), texts, num_workers
        )

    def count_batch(
        self,
        texts: list[str],
        add_special_tokens: bool = True,
        num_workers: int | None = None,
    ) -> list[int]:
        """Count tokens of many texts on a thread pool, preserving input order."""
        return self._map_batch(
            lambda text: self.count(text, add_special_tokens), texts, num_workers
        )

    def _merge(self, pretoken: str) -> Word:
        """Return the subword decomposition of one pre-token, memoized."""
        cached = self._cache.get(pretoken)
        if cached is not None:
            return cached

        symbols = bytes_to_text(pretoken.encode("utf-8"))
        # mark the last symbol as word-final before merging
        word = tuple(symbols[:-1]) + (symbols[-1] + END_OF_WORD,)
        return self._cache.setdefault(pretoken, bpe(word, self.vocab.ranks))

    def _map_batch(
        self,
        func: Callable[[str], T],
        texts: list[str],
        num_workers: int | None,
    ) -> list[T]:
        """Apply ``func`` to every text, grouping texts across worker threads."""
        if not texts:
            return []

        if num_workers is None:
            workers = os.cpu_count() or 1
        else:
            workers = max(1, num_workers)  # "0" interpreted as 1 worker

        if workers == 1 or len(texts) == 1:
            return [func(text) for text in texts]

        # group texts to reduce task-scheduling overhead when the input
        # contains many documents
        target_tasks = min(len(texts), workers * 2)
        group_size = max(1, ceil(len(texts) / target_tasks))
        text_groups = [
            texts[idx : idx + group_size] for idx in range(0, len(texts), group_size)
        ]
        log.debug(f"processing {len(texts)} texts in {len(text_groups)} groups")

        def process_group(group: list[str]) -> list[T]:
            return [func(text) for text in group]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            processed = list(pool.map(process_group, text_groups))
        return [result for group in processed for result in group]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(vocab_size={self.vocab.size})"
