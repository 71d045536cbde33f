import hashlib
import hmac
from typing import Optional

SIGNATURE_PREFIX = "sha256="
SIGNATURE_HEADER = "x-hub-signature-256"


def sign_payload(raw_body: bytes, secret: str) -> str:
    """Build the `X-Hub-Signature-256` header value Meta would send for this body."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_signature(signature: Optional[str], raw_body: bytes, secret: Optional[str]) -> bool:
    """
    Validate a webhook signature against the raw request bytes.

    The digest must be computed over the body exactly as received. Hashing a
    re-serialized JSON object changes whitespace, key order and escaping, and
    the comparison then fails for perfectly valid deliveries.

    Args:
        signature: Value of the X-Hub-Signature-256 header
        raw_body: Unparsed request body
        secret: Meta app secret

    Returns:
        True only when the header is well formed and the digests match
    """
    if not signature or not signature.startswith(SIGNATURE_PREFIX):
        return False
    if not secret:
        return False

    expected = signature[len(SIGNATURE_PREFIX):]
    computed = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    # Header values may carry non-ASCII text; compare_digest only takes ASCII str
    return hmac.compare_digest(computed.encode("ascii"), expected.encode("utf-8", "replace"))
