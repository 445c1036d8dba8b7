"""Enumerations stored in the two history schemas and the mappings between them."""

from __future__ import annotations

from enum import IntEnum

from .errors import EnumError


class Dnf4TransState(IntEnum):
    UNKNOWN = 0
    DONE = 1
    ERROR = 2


class Dnf5TransState(IntEnum):
    STARTED = 1
    OK = 2
    ERROR = 3


class Dnf4TransItemAction(IntEnum):
    INSTALL = 1
    DOWNGRADE = 2
    DOWNGRADED = 3
    OBSOLETE = 4
    OBSOLETED = 5
    UPGRADE = 6
    UPGRADED = 7
    REMOVE = 8
    REINSTALL = 9
    REINSTALLED = 10
    REASON_CHANGE = 11


class Dnf5TransItemAction(IntEnum):
    INSTALL = 1
    UPGRADE = 2
    DOWNGRADE = 3
    REINSTALL = 4
    REMOVE = 5
    REPLACED = 6
    REASON_CHANGE = 7


class Dnf4TransItemReason(IntEnum):
    UNKNOWN = 0
    DEPENDENCY = 1
    USER = 2
    CLEAN = 3
    WEAK_DEPENDENCY = 4
    GROUP = 5


class Dnf5TransItemReason(IntEnum):
    NONE = 0
    DEPENDENCY = 1
    USER = 2
    CLEAN = 3
    WEAK_DEPENDENCY = 4
    GROUP = 5
    EXTERNAL_USER = 6


class Dnf4TransItemState(IntEnum):
    UNKNOWN = 0
    DONE = 1
    ERROR = 2


class Dnf5TransItemState(IntEnum):
    STARTED = 1
    OK = 2
    ERROR = 3


_TRANS_STATE = {
    Dnf4TransState.UNKNOWN: Dnf5TransState.STARTED,
    Dnf4TransState.DONE: Dnf5TransState.OK,
    Dnf4TransState.ERROR: Dnf5TransState.ERROR,
}

# OBSOLETE is never written by either version, so it has no mapping.
_TRANS_ITEM_ACTION = {
    Dnf4TransItemAction.INSTALL: Dnf5TransItemAction.INSTALL,
    Dnf4TransItemAction.DOWNGRADE: Dnf5TransItemAction.DOWNGRADE,
    Dnf4TransItemAction.UPGRADE: Dnf5TransItemAction.UPGRADE,
    Dnf4TransItemAction.REMOVE: Dnf5TransItemAction.REMOVE,
    Dnf4TransItemAction.REINSTALL: Dnf5TransItemAction.REINSTALL,
    Dnf4TransItemAction.REASON_CHANGE: Dnf5TransItemAction.REASON_CHANGE,
    Dnf4TransItemAction.DOWNGRADED: Dnf5TransItemAction.REPLACED,
    Dnf4TransItemAction.OBSOLETED: Dnf5TransItemAction.REPLACED,
    Dnf4TransItemAction.UPGRADED: Dnf5TransItemAction.REPLACED,
    Dnf4TransItemAction.REINSTALLED: Dnf5TransItemAction.REPLACED,
}

_TRANS_ITEM_REASON = {
    Dnf4TransItemReason.UNKNOWN: Dnf5TransItemReason.EXTERNAL_USER,
    Dnf4TransItemReason.DEPENDENCY: Dnf5TransItemReason.DEPENDENCY,
    Dnf4TransItemReason.USER: Dnf5TransItemReason.USER,
    Dnf4TransItemReason.CLEAN: Dnf5TransItemReason.CLEAN,
    Dnf4TransItemReason.WEAK_DEPENDENCY: Dnf5TransItemReason.WEAK_DEPENDENCY,
    Dnf4TransItemReason.GROUP: Dnf5TransItemReason.GROUP,
}

_TRANS_ITEM_STATE = {
    Dnf4TransItemState.UNKNOWN: Dnf5TransItemState.STARTED,
    Dnf4TransItemState.DONE: Dnf5TransItemState.OK,
    Dnf4TransItemState.ERROR: Dnf5TransItemState.ERROR,
}


def _cast(value: int, source: type[IntEnum], mapping: dict) -> IntEnum:
    try:
        return mapping[source(value)]
    except (ValueError, KeyError):
        raise EnumError(source.__name__, int(value)) from None


def cast_trans_state(state: int) -> Dnf5TransState:
    """Map a stored transaction state to its new value."""
    return _cast(state, Dnf4TransState, _TRANS_STATE)


def cast_trans_item_action(action: int) -> Dnf5TransItemAction:
    """Map a stored transaction item action to its new value."""
    return _cast(action, Dnf4TransItemAction, _TRANS_ITEM_ACTION)


def cast_trans_item_reason(reason: int) -> Dnf5TransItemReason:
    """Map a stored transaction item reason to its new value."""
    return _cast(reason, Dnf4TransItemReason, _TRANS_ITEM_REASON)


def cast_trans_item_state(state: int) -> Dnf5TransItemState:
    """Map a stored transaction item state to its new value."""
    return _cast(state, Dnf4TransItemState, _TRANS_ITEM_STATE)