"""Role definitions exposed by the commit table model."""

from __future__ import annotations

from enum import IntEnum
from typing import Dict

from PySide6.QtCore import Qt


class Roles(IntEnum):
    """Custom roles exposed to QML or widgets."""

    COMMIT_ID = Qt.UserRole + 1
    COMMIT_HASH = Qt.UserRole + 2
    ROOT = Qt.UserRole + 3
    REFS = Qt.UserRole + 4
    BRANCHES = Qt.UserRole + 5
    IS_LOADING = Qt.UserRole + 6
    FALLBACK_REASON = Qt.UserRole + 7
    RAW_VALUE = Qt.UserRole + 8


def role_names(base: Dict[int, bytes] | None = None) -> Dict[int, bytes]:
    """Return a mapping of Qt role numbers to byte names."""

    mapping: Dict[int, bytes] = {} if base is None else dict(base)
    mapping.update(
        {
            Roles.COMMIT_ID: b"commitId",
            Roles.COMMIT_HASH: b"commitHash",
            Roles.ROOT: b"root",
            Roles.REFS: b"refs",
            Roles.BRANCHES: b"branches",
            Roles.IS_LOADING: b"isLoading",
            Roles.FALLBACK_REASON: b"fallbackReason",
            Roles.RAW_VALUE: b"rawValue",
        }
    )
    return mapping
