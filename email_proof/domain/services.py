# email_proof/domain/services.py
from __future__ import annotations

import hmac
import random
import string

PROOF_CODE_MIN = 1000
PROOF_CODE_MAX = 9999

_ASCII_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def generate_proof_code(rng: random.Random) -> int:
    """Uniform 4-digit numeric code in [1000, 9999]."""
    return rng.randint(PROOF_CODE_MIN, PROOF_CODE_MAX)


def fold_email(email: str) -> str:
    """
    Ordinal case folding: only ASCII letters are lowered, so the result
    never depends on the process locale or on Unicode special casing.
    """
    return email.translate(_ASCII_FOLD)


def same_email(a: str, b: str) -> bool:
    return fold_email(a) == fold_email(b)


def secure_compare(a: str, b: str) -> bool:
    """Constant-time comparison for secrets; non-ASCII text is compared as UTF-8."""
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))
