from .branch import BranchName, parse_branch_name
from .commit import Commit, CommitKind, ParsedLine, classify_commit_kind, parse_commit
from .hook import CleanupMode, cleanup_mode_from_config, parse_hook_message
from .records import CommitRecord, Trailer

__all__ = [
    "BranchName",
    "CleanupMode",
    "Commit",
    "CommitKind",
    "CommitRecord",
    "ParsedLine",
    "Trailer",
    "classify_commit_kind",
    "cleanup_mode_from_config",
    "parse_branch_name",
    "parse_commit",
    "parse_hook_message",
]
