"""
Preset reminder messages.
"""

from post_compact_reminder.core.errors import UnknownTemplateError

TEMPLATE_MINIMAL = "Context compacted. Re-read AGENTS.md."

TEMPLATE_DETAILED = """Context was just compacted. Please:
1. Re-read AGENTS.md for project conventions
2. Check the current task list
3. Review recent git commits (git log --oneline -5)
4. Verify any uncommitted changes (git status)"""

TEMPLATE_CHECKLIST = """Context compacted. Before continuing:
- [ ] Re-read AGENTS.md
- [ ] Check task list (/tasks)
- [ ] Review recent commits
- [ ] Run test suite
- [ ] Check git status"""

TEMPLATE_DEFAULT = (
    "Context was just compacted. Please reread AGENTS.md to refresh your understanding "
    "of project conventions and agent coordination patterns."
)

TEMPLATES: dict[str, str] = {
    "minimal": TEMPLATE_MINIMAL,
    "detailed": TEMPLATE_DETAILED,
    "checklist": TEMPLATE_CHECKLIST,
    "default": TEMPLATE_DEFAULT,
}

TEMPLATE_DESCRIPTIONS: dict[str, str] = {
    "minimal": "Short one-liner",
    "detailed": "Step-by-step instructions",
    "checklist": "Markdown checklist format",
    "default": "Standard message",
}


def template_names() -> list[str]:
    return list(TEMPLATES)


def get_template(name: str) -> str:
    """
    Look up a preset message by name.

    Raises:
        UnknownTemplateError: If ``name`` is not a preset
    """
    try:
        return TEMPLATES[name]
    except KeyError:
        raise UnknownTemplateError(name, template_names()) from None
