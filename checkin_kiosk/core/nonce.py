from __future__ import annotations
import random
import string

NONCE_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits

def generate_nonce(length: int = 32) -> str:
    # idempotency key for one redemption attempt; not a secret
    return "".join(random.choice(NONCE_ALPHABET) for _ in range(length))
