"""Output backends for TeXMark."""
