"""Error taxonomy for repository cleaning."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Categorize cleaner errors by phase."""

    VALIDATION = "validation"
    INPUT_IO = "input_io"
    EXTERNAL_TOOL = "external_tool"
    PRECONDITION = "precondition"


class ErrorCode(StrEnum):
    """Stable discriminants surfaced to callers and the CLI."""

    INVALID_PATTERN = "INVALID_PATTERN"
    INVALID_OPTIONS = "INVALID_OPTIONS"
    NOT_GIT_REPO = "NOT_GIT_REPO"
    EMPTY_REPO = "EMPTY_REPO"
    WORKING_TREE_DIRTY = "WORKING_TREE_DIRTY"
    DETACHED_HEAD = "DETACHED_HEAD"
    FILE_READ_ERROR = "FILE_READ_ERROR"
    SCAN_ERROR = "SCAN_ERROR"
    COMMIT_READ_FAILED = "COMMIT_READ_FAILED"
    BACKUP_FAILED = "BACKUP_FAILED"
    BACKUP_MISSING = "BACKUP_MISSING"
    TOOL_NOT_FOUND = "TOOL_NOT_FOUND"
    REMOVAL_FAILED = "REMOVAL_FAILED"
    REWRITE_FAILED = "REWRITE_FAILED"
    INVALID_TRANSITION = "INVALID_TRANSITION"


class CleanerError(Exception):
    """Base exception for cleaner failures.

    Every error carries a stable ``code`` and an optional wrapped ``cause``.
    """

    kind: ErrorKind = ErrorKind.VALIDATION
    default_code: ErrorCode = ErrorCode.INVALID_OPTIONS

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class ValidationError(CleanerError, ValueError):
    """Raised before any mutation when inputs or repository state are invalid."""


class PatternValidationError(ValidationError):
    """Raised when a rule or directory name is malformed."""

    default_code = ErrorCode.INVALID_PATTERN


class ConfigurationError(ValidationError):
    """Raised when option combinations are invalid."""

    default_code = ErrorCode.INVALID_OPTIONS


class NotVersionedError(ValidationError):
    """Raised when the target path has no repository metadata."""

    default_code = ErrorCode.NOT_GIT_REPO


class EmptyHistoryError(ValidationError):
    """Raised when the repository has no root change."""

    default_code = ErrorCode.EMPTY_REPO


class DirtyWorkingTreeError(ValidationError):
    """Raised when the working tree has uncommitted changes."""

    default_code = ErrorCode.WORKING_TREE_DIRTY


class DetachedHeadError(ValidationError):
    """Raised when commit messages would be rewritten on a detached HEAD."""

    default_code = ErrorCode.DETACHED_HEAD


class PatternSourceError(CleanerError):
    """Raised when a pattern source file cannot be read."""

    kind = ErrorKind.INPUT_IO
    default_code = ErrorCode.FILE_READ_ERROR


class ExternalToolError(CleanerError, RuntimeError):
    """Base class for failures of git, BFG, or filter-branch."""

    kind = ErrorKind.EXTERNAL_TOOL
    default_code = ErrorCode.SCAN_ERROR

    def __init__(
        self,
        message: str,
        *,
        code: ErrorCode | None = None,
        cause: BaseException | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message, code=code, cause=cause)
        self.stderr = stderr


class ScanError(ExternalToolError):
    """Raised when history cannot be read."""

    default_code = ErrorCode.SCAN_ERROR


class CommitReadError(ExternalToolError):
    """Raised when commits or messages cannot be enumerated."""

    default_code = ErrorCode.COMMIT_READ_FAILED


class BackupError(ExternalToolError):
    """Raised when the backup ref cannot be created."""

    default_code = ErrorCode.BACKUP_FAILED


class ToolNotFoundError(ExternalToolError):
    """Raised in execute mode when a required tool is unavailable."""

    default_code = ErrorCode.TOOL_NOT_FOUND


class RemovalFailedError(ExternalToolError):
    """Raised when the blob-removal tool or compaction fails."""

    default_code = ErrorCode.REMOVAL_FAILED


class RewriteFailedError(ExternalToolError):
    """Raised when the history rewrite fails."""

    default_code = ErrorCode.REWRITE_FAILED


class PreconditionError(CleanerError, RuntimeError):
    """Raised when a mutation is attempted without its safety preconditions."""

    kind = ErrorKind.PRECONDITION
    default_code = ErrorCode.BACKUP_MISSING


class MissingBackupError(PreconditionError):
    """Raised when no backup ref resolves to the pre-mutation head."""

    default_code = ErrorCode.BACKUP_MISSING


class InvalidTransitionError(PreconditionError):
    """Raised when the pipeline state machine is driven out of order."""

    default_code = ErrorCode.INVALID_TRANSITION


__all__ = [
    "BackupError",
    "CleanerError",
    "CommitReadError",
    "ConfigurationError",
    "DetachedHeadError",
    "DirtyWorkingTreeError",
    "EmptyHistoryError",
    "ErrorCode",
    "ErrorKind",
    "ExternalToolError",
    "InvalidTransitionError",
    "MissingBackupError",
    "NotVersionedError",
    "PatternSourceError",
    "PatternValidationError",
    "PreconditionError",
    "RemovalFailedError",
    "RewriteFailedError",
    "ScanError",
    "ToolNotFoundError",
    "ValidationError",
]
