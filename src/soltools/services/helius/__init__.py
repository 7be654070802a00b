"""Helius API client and response models."""

from soltools.services.helius.client import HeliusClient
from soltools.services.helius.models import AccountData, Transaction

__all__ = ["AccountData", "HeliusClient", "Transaction"]
