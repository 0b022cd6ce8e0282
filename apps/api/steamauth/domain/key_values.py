"""OpenID key-value form decoding."""


def parse_key_values(body: str) -> dict[str, str]:
    """Decode a ``key:value`` per line reply into a mapping.

    Lines are split on the first colon only, so values keep any further colons.
    Lines without a colon are skipped. A repeated key keeps its last value.
    """
    pairs: dict[str, str] = {}
    for line in body.split("\n"):
        key, separator, value = line.partition(":")
        if not separator:
            continue
        pairs[key] = value
    return pairs
