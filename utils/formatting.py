"""
Formatting utilities.
"""


def format_currency(amount: int, currency: str = "KRW") -> str:
    """
    Format an integer amount as currency.

    Args:
        amount: The amount in whole units (won).
        currency: Currency code (default KRW).

    Returns:
        Formatted currency string, e.g. "₩196,000,000" or "-₩1,000".
    """
    symbols = {
        "KRW": "₩",
        "USD": "$",
    }
    symbol = symbols.get(currency, currency + " ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(round(amount)):,}"


def format_won(amount: int) -> str:
    """Format won with the 원 suffix, e.g. 196000000 -> "196,000,000원"."""
    return f"{round(amount):,}원"


def format_percent(value: float, decimals: int = 1) -> str:
    """
    Format a ratio as a percentage.

    Args:
        value: The ratio (0.125 means 12.5%).
        decimals: Number of decimal places.

    Returns:
        Formatted percentage string.
    """
    return f"{value * 100:.{decimals}f}%"


def format_eok(amount: int) -> str:
    """Format won in 억 (100 million) units, e.g. 196000000 -> "1.96억"."""
    return f"{amount / 100_000_000:.2f}억"
