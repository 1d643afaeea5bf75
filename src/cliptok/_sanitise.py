"""
Utilities for rendering raw resource text in error messages.
"""

# merge lines are short; anything longer is cut in messages
_MAX_RENDERED = 80


def _visible(c: str) -> str:
    if c.isprintable():
        return c
    code = ord(c)
    if code < 0x100:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def render_line(line: str) -> str:
    """
    Quote a resource line for an error message.

    Characters that would not print (control, format and separator
    characters other than the plain space) are shown as ``\\x..`` or
    ``\\u....`` escapes, and lines past the display limit are cut.
    """
    cut = len(line) > _MAX_RENDERED
    shown = "".join(_visible(c) for c in line[:_MAX_RENDERED])
    return f"'{shown}...'" if cut else f"'{shown}'"
