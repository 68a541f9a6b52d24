"""
Session/view controller for the inventory page.

One ``InventorySession`` per browser session holds everything the page shows:
who is logged in, the last-fetched inventory, the search term, the login/register
toggle and the add-item dialog. Every add/remove goes through the API and is
followed by a full re-fetch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from frontend.client import ApiError, StockMasterClient

logger = logging.getLogger(__name__)

# Failures reported as a notification by login()/register(); an unreachable API included
AUTH_ERRORS = (ApiError, requests.RequestException)


class NotAuthenticatedError(RuntimeError):
    pass


@dataclass
class SessionUser:
    email: str
    id: str


def filter_items(items: List[Dict[str, Any]], term: Optional[str]) -> List[Dict[str, Any]]:
    """Keep items whose name contains ``term``, ignoring case."""
    needle = (term or "").lower()
    return [it for it in items if needle in str(it.get("name", "")).lower()]


def display_name(name: str) -> str:
    # Only the first letter is touched: "iPhone case" -> "IPhone case"
    return name[:1].upper() + name[1:]


@dataclass
class InventorySession:
    client: StockMasterClient
    user: Optional[SessionUser] = None
    inventory: List[Dict[str, Any]] = field(default_factory=list)
    search_term: str = ""
    is_registering: bool = False
    modal_open: bool = False
    item_name: str = ""
    notification: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def filtered_inventory(self) -> List[Dict[str, Any]]:
        return filter_items(self.inventory, self.search_term)

    # ----------------------------
    # Auth
    # ----------------------------

    def _authenticate(self, email: str, password: str) -> SessionUser:
        self.client.login(email, password)
        me = self.client.me()
        return SessionUser(email=email, id=str(me["id"]))

    def _auth_failed(self, prefix: str, email: str, error: Exception) -> None:
        logger.info("%s for %s: %s", prefix, email, error)
        self.client.token = None
        detail = error.detail if isinstance(error, ApiError) else error
        self.notification = f"{prefix}: {detail}"

    def _start_session(self, user: SessionUser) -> None:
        # Store failures from the first fetch propagate like any other list failure
        self.user = user
        self.notification = None
        self.refresh()

    def login(self, email: str, password: str) -> bool:
        try:
            user = self._authenticate(email, password)
        except AUTH_ERRORS as e:
            self._auth_failed("Error logging in", email, e)
            return False
        self._start_session(user)
        return True

    def register(self, email: str, password: str) -> bool:
        try:
            self.client.register(email, password)
            user = self._authenticate(email, password)
        except AUTH_ERRORS as e:
            self._auth_failed("Error registering", email, e)
            return False
        self.is_registering = False
        self._start_session(user)
        return True

    def toggle_mode(self) -> None:
        self.is_registering = not self.is_registering

    # ----------------------------
    # Inventory
    # ----------------------------

    def _require_user(self) -> SessionUser:
        if self.user is None:
            raise NotAuthenticatedError("Log in before touching the inventory")
        return self.user

    def refresh(self) -> List[Dict[str, Any]]:
        self._require_user()
        self.inventory = self.client.list_items()
        return self.inventory

    def add_item(self, name: str) -> None:
        self._require_user()
        self.client.add_item(name)
        self.refresh()

    def remove_item(self, name: str) -> None:
        self._require_user()
        self.client.remove_item(name)
        self.refresh()

    # ----------------------------
    # Add-item dialog
    # ----------------------------

    def open_modal(self) -> None:
        self.modal_open = True

    def close_modal(self) -> None:
        self.modal_open = False

    def submit_new_item(self) -> None:
        name = self.item_name.strip()
        self.item_name = ""
        self.modal_open = False
        if not name:
            self.notification = "Item name is required"
            return
        self.add_item(name)
