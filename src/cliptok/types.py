"""
Core types for tokenization.
"""

from typing import TypeAlias

Token: TypeAlias = int
Subword: TypeAlias = str
SubwordPair: TypeAlias = tuple[Subword, Subword]
Word: TypeAlias = tuple[Subword, ...]
Ranks: TypeAlias = dict[SubwordPair, int]
