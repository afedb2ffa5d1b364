"""Repository access: discovery, plumbing, settings, and backup refs."""

from __future__ import annotations

from gitops.backup import BACKUP_REF_PREFIX, BackupRef, backup_ref_name, create_backup_ref
from gitops.context import GitContext, open_git_context, require_git_context
from gitops.plumbing import GitPlumbing, HistoryAddition, RepositoryPlumbing

__all__ = [
    "BACKUP_REF_PREFIX",
    "BackupRef",
    "GitContext",
    "GitPlumbing",
    "HistoryAddition",
    "RepositoryPlumbing",
    "backup_ref_name",
    "create_backup_ref",
    "open_git_context",
    "require_git_context",
]
