"""
Core Byte Pair Encoding (BPE) merge operations.
"""

from .types import Ranks, SubwordPair, Word


def get_pairs(word: Word) -> set[SubwordPair]:
    """Return the set of adjacent symbol pairs in ``word``."""
    return set(zip(word, word[1:]))


def bpe_merge(word: Word, target: SubwordPair) -> Word:
    """
    Merge all occurrences of a target symbol pair into a single symbol.

    Occurrences are taken leftmost first and never overlap, so ``a a a``
    merged on ``(a, a)`` becomes ``aa a``.
    """
    first, second = target
    merged: list[str] = []

    i = 0
    while i < len(word):
        # check if we can form a pair and it matches the target
        if i < len(word) - 1 and word[i] == first and word[i + 1] == second:
            merged.append(first + second)
            i += 2
        else:
            merged.append(word[i])
            i += 1

    return tuple(merged)


def bpe(word: Word, ranks: Ranks) -> Word:
    """
    Reduce ``word`` by repeatedly applying its lowest-ranked merge.

    Each round scans all adjacent pairs, picks the one with the smallest rank
    and merges every occurrence of it. Pairs absent from ``ranks`` are never
    merged. Stops when no known pair remains or a single symbol is left; the
    word shrinks every round, so this always terminates.

    :param word: Symbols to merge, initially one per mapped byte.
    :param ranks: Merge priority per pair, lower merges first.
    :return: The final subword decomposition.
    """
    while len(word) > 1:
        known = [pair for pair in get_pairs(word) if pair in ranks]
        if not known:
            break
        # ranks are unique so there is never a tie
        best = min(known, key=ranks.__getitem__)
        word = bpe_merge(word, best)

    return word
