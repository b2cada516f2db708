"""
Conversion between standard base64 and a URL-path-safe rendering of it.

Neither direction validates its input; whether the decoded string is
well-formed base64 is decided by whoever decodes it next.
"""


def encode(standard_b64: str) -> str:
    """Maps `+` to `-` and `/` to `_`, and drops trailing `=` padding."""
    return standard_b64.replace("+", "-").replace("/", "_").rstrip("=")


def decode(url_safe: str) -> str:
    """Maps `-` to `+` and `_` to `/`, and pads with `=` to a multiple of 4."""
    standard_b64 = url_safe.replace("-", "+").replace("_", "/")
    return standard_b64 + "=" * (-len(standard_b64) % 4)
