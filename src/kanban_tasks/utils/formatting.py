"""
Canonical token formatting for task markdown serialization.

This module is the single source of truth for how each metadata token is
rendered back to markdown. The parser's token patterns in
parsers.task_parser must accept exactly what is produced here.

Current canonical format:
- Points (reward value): $<n>
- Completion date (Obsidian Tasks plugin compatible): ✅ <YYYY-MM-DD>
- Tags and the column tag: #<name>
- Block reference: ^<id>
"""

DONE_DATE_EMOJI = "✅"


def render_points(points: int) -> str:
    return f"${points}"


def render_done_date(done_date: str) -> str:
    return f"{DONE_DATE_EMOJI} {done_date}"


def render_tag(name: str) -> str:
    return f"#{name}"


def render_block_link(block_link: str) -> str:
    return f"^{block_link}"
