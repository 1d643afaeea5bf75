"""Custom exception hierarchy for cliptok errors."""


class CLIPTokError(Exception):
    """Base exception for all cliptok errors."""


class InitializationError(CLIPTokError):
    """
    Raised when the vocabulary resource cannot be turned into a tokenizer.

    Covers a missing resource, a corrupt gzip stream, malformed merge lines,
    and a vocabulary whose size or ids do not add up. A tokenizer is never
    built from a resource that fails any of these checks.
    """

    def __init__(
        self,
        message: str,
        *,
        resource: str | None = None,
        line_no: int | None = None,
        vocab_size: int | None = None,
    ) -> None:
        """Initialize with optional resource details that get appended to the message."""
        extra = " "
        if resource:
            extra += f"(resource: {resource}) "
        # parsing: position of the offending merge line
        if line_no is not None:
            extra += f"(line: {line_no}) "
        if vocab_size is not None:
            extra += f"(vocab size: {vocab_size}) "
        super().__init__(message + extra)
        self.resource = resource
        self.line_no = line_no
        self.vocab_size = vocab_size


class TokenizationError(CLIPTokError):
    """
    Raised when a merged subword has no vocabulary id.

    Every subword the merge engine can produce is in the vocabulary, so this
    signals a defect in the tables or the engine, never bad input text.
    """

    def __init__(self, message: str, *, subword: str | None = None) -> None:
        if subword is not None:
            message = f"{message} (subword: {subword!r})"
        super().__init__(message)
        self.subword = subword

