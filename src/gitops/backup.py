"""Backup references created before any history rewrite."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

from errors import BackupError, MissingBackupError
from gitops.plumbing import GitPlumbing
from serde_msgspec import StructBaseStrict

LOGGER = logging.getLogger(__name__)

BACKUP_REF_PREFIX = "refs/backup/pre-clean-"


class BackupRef(StructBaseStrict, frozen=True):
    """Named reference pinning the pre-mutation head.

    ``name`` is the full ref name; ``short_name`` is what users pass to
    ``git reset --hard`` to recover.
    """

    name: str
    target: str
    created_at: str

    @property
    def short_name(self) -> str:
        return self.name.removeprefix("refs/")


def backup_timestamp(moment: datetime | None = None) -> str:
    """Return a ref-safe ISO-8601 UTC timestamp with millisecond precision.

    Returns:
    -------
    str
        Timestamp such as ``2024-05-01T10-20-30-123Z``.
    """
    value = (moment or datetime.now(UTC)).astimezone(UTC)
    iso = value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return iso.replace(":", "-").replace(".", "-")


def backup_ref_name(moment: datetime | None = None) -> str:
    """Return the full backup ref name for ``moment``."""
    return f"{BACKUP_REF_PREFIX}{backup_timestamp(moment)}"


def create_backup_ref(
    plumbing: GitPlumbing,
    *,
    target: str | None = None,
    moment: datetime | None = None,
) -> BackupRef:
    """Create a backup ref pointing at ``target`` (default: HEAD).

    Returns:
    -------
    BackupRef
        The created reference.

    Raises
    ------
    BackupError
        Raised when HEAD is unborn or the ref cannot be created.
    """
    resolved = target or plumbing.head_sha()
    if resolved is None:
        msg = "Cannot create a backup of a repository without commits"
        raise BackupError(msg)
    created = moment or datetime.now(UTC)
    name = backup_ref_name(created)
    # Two phases can back up within the same millisecond.
    while plumbing.resolve(name) is not None:
        created += timedelta(milliseconds=1)
        name = backup_ref_name(created)
    plumbing.create_ref(name, resolved)
    backup = BackupRef(name=name, target=resolved, created_at=created.isoformat())
    LOGGER.info(
        "Backup created: %s (restore with: git reset --hard %s)",
        backup.short_name,
        backup.short_name,
    )
    return backup


def require_backup(plumbing: GitPlumbing, backup: BackupRef | None, *, head: str) -> BackupRef:
    """Return ``backup`` after checking it still pins ``head``.

    Returns:
    -------
    BackupRef
        The verified backup.

    Raises
    ------
    MissingBackupError
        Raised when no backup was given or it does not resolve to ``head``.
    """
    if backup is None:
        msg = "A backup ref is required before rewriting history"
        raise MissingBackupError(msg)
    resolved = plumbing.resolve(backup.name)
    if resolved != head:
        msg = (
            f"Backup {backup.short_name} resolves to {resolved or 'nothing'}, "
            f"expected pre-mutation head {head}"
        )
        raise MissingBackupError(msg)
    return backup


__all__ = [
    "BACKUP_REF_PREFIX",
    "BackupRef",
    "backup_ref_name",
    "backup_timestamp",
    "create_backup_ref",
    "require_backup",
]
