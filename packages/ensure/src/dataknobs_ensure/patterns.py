"""Common regular expressions for ``StringValidator.matches``.

Patterns are anchored with ``\\A``/``\\Z`` so a trailing newline never
matches, and use ASCII-only classes (``[0-9]``, ``(?a)``).
"""

# Basic patterns
ALPHA = r"(?ai)\A[a-z]+\Z"
ALPHA_NUM = r"(?ai)\A[a-z0-9]+\Z"
NUMBERS = r"\A[0-9]+\Z"
DECIMAL = r"\A[0-9]*\.[0-9]+\Z"

# Identifiers
UUID4 = r"(?ai)\A[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\Z"

# Internet
IPV4 = (
    r"\A(([0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])\.){3}"
    r"([0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])\Z"
)
EMAIL = (
    r"(?ai)\A[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\Z"
)

# Hashes
MD5 = r"\A[0-9a-f]{32}\Z"
SHA1 = r"\A[0-9a-f]{40}\Z"
SHA256 = r"\A[0-9a-f]{64}\Z"
SHA512 = r"\A[0-9a-f]{128}\Z"

# Lookup by name, used by the validator factory
NAMED_PATTERNS: dict[str, str] = {
    "alpha": ALPHA,
    "alpha_num": ALPHA_NUM,
    "numbers": NUMBERS,
    "decimal": DECIMAL,
    "uuid4": UUID4,
    "ipv4": IPV4,
    "email": EMAIL,
    "md5": MD5,
    "sha1": SHA1,
    "sha256": SHA256,
    "sha512": SHA512,
}
