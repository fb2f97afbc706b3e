"""
Hook script artifact: rendering, message templates and version detection.
"""

from post_compact_reminder.core.hook.script import (
    SCRIPT_NAME,
    extract_message,
    extract_template_name,
    install_hook_script,
    is_executable,
    read_script,
    remove_hook_script,
    render_hook_script,
    run_hook_test,
)
from post_compact_reminder.core.hook.templates import (
    TEMPLATE_DEFAULT,
    TEMPLATES,
    get_template,
    template_names,
)
from post_compact_reminder.core.hook.version import (
    VersionStatus,
    compare_versions,
    extract_version,
    get_installed_version,
)

__all__ = [
    "SCRIPT_NAME",
    "TEMPLATES",
    "TEMPLATE_DEFAULT",
    "VersionStatus",
    "compare_versions",
    "extract_message",
    "extract_template_name",
    "extract_version",
    "get_installed_version",
    "get_template",
    "install_hook_script",
    "is_executable",
    "read_script",
    "remove_hook_script",
    "render_hook_script",
    "run_hook_test",
    "template_names",
]
