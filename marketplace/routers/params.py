from marketplace.core.errors import NotFoundError

# Largest value a 64-bit signed INTEGER column can hold
MAX_ID = 2**63 - 1


def parse_id(value: str, detail: str = "Not found") -> int:
    """Parse a path identifier; malformed ids are reported as missing resources."""
    if not value.isdigit() or not value.isascii():
        raise NotFoundError(detail)
    parsed = int(value)
    if parsed < 1 or parsed > MAX_ID:
        raise NotFoundError(detail)
    return parsed
