"""Helpers for keeping secrets out of logs"""

from typing import Optional


def mask(secret: Optional[str], visible: int = 4) -> str:
    """Mask a token, keeping only a few characters at both ends

    Args:
        secret: Token or password
        visible: Characters kept at each end

    Returns:
        Masked representation safe to log
    """
    if not secret:
        return "<empty>"
    if len(secret) <= visible * 2:
        return "*" * len(secret)
    return f"{secret[:visible]}...{secret[-visible:]}"
