"""Fixed values of the CLIP tokenization scheme."""

from typing import Final

# 256 byte symbols + 256 word-final symbols + 48,894 merges + 2 special tokens
VOCAB_SIZE: Final[int] = 49408
# context window of the downstream text encoder; never enforced here
CONTEXT_LENGTH: Final[int] = 77

N_BASE_TOKENS: Final[int] = 256
END_OF_WORD: Final[str] = "</w>"
SOT_TOKEN: Final[str] = "<|startoftext|>"
EOT_TOKEN: Final[str] = "<|endoftext|>"
SPECIAL_TOKENS: Final[tuple[str, str]] = (SOT_TOKEN, EOT_TOKEN)

VOCAB_RESOURCE: Final[str] = "bpe_simple_vocab_16e6.txt.gz"
