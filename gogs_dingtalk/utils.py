"""Small text helpers shared by the formatters and the hook router."""

from __future__ import annotations

import hashlib
import hmac

_REF_PREFIXES = ("refs/heads/", "refs/tags/", "refs/remotes/")


def markdown_link(url: str, text: str) -> str:
    """
    Format a link address and its title as a Markdown link.

    Neither argument is escaped.

    Example
    -------
    ('https://x/y', 'y') → '[y](https://x/y)'
    """
    return "[" + text + "](" + url + ")"


def ref_short_name(ref: str) -> str:
    """Strip the ``refs/heads/``-style prefix from a full ref name."""
    for prefix in _REF_PREFIXES:
        if ref.startswith(prefix):
            return ref[len(prefix):]
    return ref


def title_case(value: str) -> str:
    """
    Upper-case the first letter of every space separated word.

    Underscores do not split words, so ``label_updated`` becomes
    ``Label_updated``.
    """
    return " ".join(word[:1].upper() + word[1:] for word in value.split(" "))


def first_line(text: str | None) -> str:
    if not text:
        return ""
    return text.split("\n", 1)[0]


def comment_hash_tag(comment_id: int) -> str:
    """Anchor name of a comment on its issue page."""
    return f"issuecomment-{comment_id}"


def gogs_verify(secret: str, body: bytes, signature_header: str | None) -> bool:
    """
    Verify a Gogs webhook signature (X-Gogs-Signature).

    Gogs sends the bare hex HMAC-SHA256 of the body; a ``sha256=`` prefix is
    tolerated as well.

    Returns
    -------
    bool
        True if valid, False otherwise.
    """
    if not signature_header:
        return False
    sig = signature_header.split("=", 1)[1] if "=" in signature_header else signature_header
    mac = hmac.new(secret.encode(), msg=body, digestmod=hashlib.sha256).hexdigest()
    return hmac.compare_digest(mac.encode(), sig.strip().lower().encode("utf-8", "ignore"))
