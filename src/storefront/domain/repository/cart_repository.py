"""Abstract repositories for the persistent, per-account cart and compare list."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart, CompareList


class CartRepository(ABC):

    @abstractmethod
    def get(self, account_id: str) -> Cart | None:
        """Return the account's cart, or None if it was never created."""

    @abstractmethod
    def save(self, account_id: str, cart: Cart) -> None:
        """Create or replace the account's cart."""

    @abstractmethod
    def delete(self, account_id: str) -> None:
        """Remove the account's cart; no-op if absent."""


class CompareRepository(ABC):

    @abstractmethod
    def get(self, account_id: str) -> CompareList | None:
        """Return the account's compare list, or None if never created."""

    @abstractmethod
    def save(self, account_id: str, compare: CompareList) -> None:
        """Create or replace the account's compare list."""
