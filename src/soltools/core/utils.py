"""Unit conversion and display helpers.

Shared utilities used across the UI, the workers and the log calls.
"""

LAMPORTS_PER_SOL = 1_000_000_000


def lamports_to_sol(lamports: int) -> float:
    """Convert lamports to SOL.

    Example:
        >>> lamports_to_sol(1_000_000_000)
        1.0
        >>> lamports_to_sol(-500_000_000)
        -0.5
    """
    return lamports / 1_000_000_000.0


def format_sol(lamports: int) -> str:
    """Format a signed lamport delta as SOL for display.

    Example:
        >>> format_sol(-5000)
        '-0.000005000 SOL'
        >>> format_sol(2_500_000_000)
        '+2.500000000 SOL'
    """
    sol = lamports_to_sol(lamports)
    if sol > 0:
        return f"+{sol:.9f} SOL"
    return f"{sol:.9f} SOL"


def truncate_address(address: str) -> str:
    """Truncate an address or signature for display: AbCd...xYz1.

    Args:
        address: Full address or signature.

    Returns:
        Truncated string (first 4 + last 4 chars).

    Example:
        >>> truncate_address("9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM")
        '9WzD...AWWM'
    """
    if len(address) > 12:
        return f"{address[:4]}...{address[-4:]}"
    return address
