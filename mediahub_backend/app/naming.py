"""Storage name generation.

Stored files are named by a random token so that names are not guessable from
the returned URLs and never collide in practice. The original extension is
kept so static serving can infer the content type.
"""
import os
import secrets

TOKEN_BYTES = 16  # 128 bits -> 32 hex characters


def generate_storage_name(original_filename: str) -> str:
    """Return ``<32 hex chars><original extension>``.

    The extension is taken verbatim (leading dot and case preserved). No
    lookup against existing names is made.
    """
    _, ext = os.path.splitext(original_filename or "")
    return f"{secrets.token_hex(TOKEN_BYTES)}{ext}"
