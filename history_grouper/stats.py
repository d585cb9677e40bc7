"""Statistics: session and entry counts per project."""

import json
from dataclasses import dataclass, field

from history_grouper.grouper import GroupedHistory


@dataclass(frozen=True)
class ProjectStat:
    project: str
    sessions: int
    entries: int


@dataclass
class HistoryStats:
    projects: int = 0
    total_sessions: int = 0
    total_entries: int = 0
    skipped_lines: int = 0
    project_stats: list[ProjectStat] = field(default_factory=list)


def summarize(grouped: GroupedHistory, skipped_lines: int = 0) -> HistoryStats:
    """Count sessions and entries; project stats are sorted by entries, descending.

    Projects with equal entry counts keep their order in *grouped*.
    """
    project_stats = []
    total_sessions = 0
    total_entries = 0

    for project, sessions in grouped.items():
        entries = sum(len(records) for records in sessions.values())
        total_sessions += len(sessions)
        total_entries += entries
        project_stats.append(ProjectStat(project=project, sessions=len(sessions), entries=entries))

    return HistoryStats(
        projects=len(grouped),
        total_sessions=total_sessions,
        total_entries=total_entries,
        skipped_lines=skipped_lines,
        project_stats=sorted(project_stats, key=lambda s: s.entries, reverse=True),
    )


def format_stats_text(stats: HistoryStats, output_path: str) -> str:
    """Human-readable run report."""
    lines = []
    lines.append(f"✓ Grouped history written to {output_path}")
    lines.append(f"  Projects found: {stats.projects}")
    lines.append(f"  Total sessions: {stats.total_sessions}")
    lines.append(f"  Total entries: {stats.total_entries}")
    if stats.skipped_lines:
        lines.append(f"  Skipped lines: {stats.skipped_lines}")
    lines.append("")

    lines.append("Summary:")
    for stat in stats.project_stats:
        lines.append(f"  {stat.project}: {stat.entries} entries in {stat.sessions} session(s)")

    return "\n".join(lines)


def format_stats_json(stats: HistoryStats) -> str:
    """JSON stats output."""
    return json.dumps({
        "projects": stats.projects,
        "total_sessions": stats.total_sessions,
        "total_entries": stats.total_entries,
        "skipped_lines": stats.skipped_lines,
        "project_stats": [
            {"project": s.project, "sessions": s.sessions, "entries": s.entries}
            for s in stats.project_stats
        ],
    }, indent=2)
