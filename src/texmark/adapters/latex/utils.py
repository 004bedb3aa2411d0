"""Escaping of literal text for LaTeX output."""

from __future__ import annotations

from functools import lru_cache
import re
import unicodedata

from pylatexenc.latexencode import UnicodeToLatexEncoder


RESERVED_CHARACTERS = "_{}%$&\\~#"

_RESERVED = re.compile("[" + re.escape(RESERVED_CHARACTERS) + "]")
_NON_ASCII = re.compile(r"[^\x00-\x7f]+")

# Accent macro followed by a bare letter or dotless i/j, e.g. ``\'e`` or ``\^\i``.
_BARE_ACCENT = re.compile(r"\\([`'^\"~=.Hrvuck])\s*([A-Za-z](?![A-Za-z{])|\\[ij](?![A-Za-z]))")

_ENCODER = UnicodeToLatexEncoder(non_ascii_only=True, unknown_char_warning=False)


@lru_cache(maxsize=512)
def _keeps_unicode(char: str) -> bool:
    """Superscripts, subscripts and modifier letters have no legacy macro."""
    name = unicodedata.name(char, "")
    if "SUPERSCRIPT" in name or "SUBSCRIPT" in name:
        return True
    return name.startswith("MODIFIER LETTER") and ("SMALL" in name or "CAPITAL" in name)


def _to_legacy(run: str) -> str:
    pieces: list[str] = []
    pending = ""
    for char in run:
        if _keeps_unicode(char):
            pieces.append(_ENCODER.unicode_to_latex(pending) if pending else "")
            pieces.append(char)
            pending = ""
        else:
            pending += char
    if pending:
        pieces.append(_ENCODER.unicode_to_latex(pending))
    return _BARE_ACCENT.sub(r"\\\1{\2}", "".join(pieces))


def escape_latex_chars(text: str, *, legacy_accents: bool = False) -> str:
    """Backslash-escape the characters LaTeX reserves for control purposes.

    Each of ``_ { } % $ & \\ ~ #`` gains one leading backslash and everything
    else is copied unchanged. With ``legacy_accents`` runs of non-ASCII
    characters are further rewritten as legacy macros (``é`` -> ``\\'{e}``)
    for engines without Unicode input.
    """
    if not text:
        return text
    escaped = _RESERVED.sub(r"\\\g<0>", text)
    if legacy_accents:
        escaped = _NON_ASCII.sub(lambda match: _to_legacy(match.group(0)), escaped)
    return escaped


__all__ = ["RESERVED_CHARACTERS", "escape_latex_chars"]
