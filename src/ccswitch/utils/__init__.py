# ABOUTME: Utility modules for ccswitch
# ABOUTME: Backup helpers live in ccswitch.utils.backup (they depend on config/state)

from ccswitch.utils.atomic import atomic_write_text
from ccswitch.utils.validation import (
    ServerIssue,
    validate_command_exists,
    validate_config,
    validate_server_entry,
)

__all__ = [
    "atomic_write_text",
    "ServerIssue",
    "validate_command_exists",
    "validate_config",
    "validate_server_entry",
]
