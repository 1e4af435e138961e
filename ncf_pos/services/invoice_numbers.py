import re

NUMBER_WIDTH = 8

_SUFFIX_RE = re.compile(r"-([0-9]+)\Z")


def format_invoice_number(prefix: str, number: int) -> str:
    """Render ``B02`` and ``43`` as ``B02-00000043``."""
    if isinstance(number, bool) or not isinstance(number, int) or number < 0:
        raise ValueError(f"Invoice number must be a non-negative integer: {number!r}")
    return f"{prefix}-{number:0{NUMBER_WIDTH}d}"


def extract_numeric_suffix(invoice_number: str | None) -> int | None:
    """Return the trailing integer of ``<prefix>-<digits>`` or None.

    Only the final hyphen-digit run counts, so hyphenated prefixes such as
    ``E-31-00000012`` parse to 12.
    """
    if not invoice_number:
        return None
    match = _SUFFIX_RE.search(invoice_number)
    if not match:
        return None
    return int(match.group(1))


def split_invoice_number(invoice_number: str) -> tuple[str, int] | None:
    match = _SUFFIX_RE.search(invoice_number or "")
    if not match:
        return None
    return invoice_number[: match.start()], int(match.group(1))
