"""SOL Tools: Solana transaction history explorer backed by the Helius API."""

__version__ = "0.1.0"
