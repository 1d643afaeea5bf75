"""Shared, lazily built tokenizer over the embedded CLIP vocabulary."""

import logging
import threading

from ._constants import VOCAB_RESOURCE
from .errors import InitializationError
from .tokenizer import CLIPTokenizer
from .types import Token
from .vocab import load_embedded_vocabulary

log = logging.getLogger(__name__)

_lock = threading.Lock()
_tokenizer: CLIPTokenizer | None = None
_init_error: InitializationError | None = None


def get_tokenizer() -> CLIPTokenizer:
    """
    Return the process-wide tokenizer, building it on first use.

    The embedded vocabulary is loaded exactly once. Threads arriving while it
    loads wait for it and receive the same instance. If loading fails, the
    failure is recorded as an :class:`InitializationError` and the load is
    never retried. The caller that triggered the load gets that error; every
    waiting or later caller gets a fresh ``InitializationError`` whose
    ``__cause__`` is the recorded one.

    :raises InitializationError: If the embedded vocabulary cannot be loaded.

    .. code-block:: python

        tokenizer = get_tokenizer()
        tokens = tokenizer.encode("a photo of a cat")
    """
    global _tokenizer, _init_error

    # fast path once initialized, no lock needed
    tokenizer = _tokenizer
    if tokenizer is not None:
        return tokenizer

    with _lock:
        if _tokenizer is not None:
            return _tokenizer
        if _init_error is not None:
            raise InitializationError(
                "tokenizer initialization failed earlier",
                resource=_init_error.resource,
            ) from _init_error

        log.debug("initializing shared tokenizer")
        try:
            tokenizer = CLIPTokenizer(load_embedded_vocabulary())
        except InitializationError as e:
            log.error(f"tokenizer initialization failed: {e}")
            _init_error = e
            raise
        except Exception as e:
            log.exception("unexpected error while loading vocabulary")
            _init_error = InitializationError(
                f"failed to load vocabulary: {e!r}", resource=VOCAB_RESOURCE
            )
            raise _init_error from e
        _tokenizer = tokenizer
        return tokenizer


def encode(text: str) -> list[Token]:
    """Encode ``text`` with the shared tokenizer, framed by start/end tokens."""
    return get_tokenizer().encode(text)


def count(text: str) -> int:
    """Return the number of tokens :func:`encode` would produce for ``text``."""
    return get_tokenizer().count(text)


def _reset() -> None:
    """Forget the shared tokenizer and any recorded failure."""
    global _tokenizer, _init_error
    with _lock:
        _tokenizer = None
        _init_error = None
