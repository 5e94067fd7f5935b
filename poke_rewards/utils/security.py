"""
Log redaction for payout addresses.
"""

REDACTED = "***"


def mask_address(address: str | None, head: int = 6, tail: int = 4) -> str:
    """
    Shorten a payout address to its ends so logs can be correlated
    without exposing the full address.

    Addresses too short to hide anything between ``head`` and ``tail``
    are fully redacted.

    Examples:
        >>> mask_address("7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU")
        '7xKXtg...gAsU'
        >>> mask_address("7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU", head=4, tail=4)
        '7xKX...gAsU'
        >>> mask_address("short")
        '***'
    """
    address = (address or "").strip()
    hidden = len(address) - head - tail
    if hidden < 1:
        return REDACTED
    return "...".join((address[:head], address[len(address) - tail:]))
