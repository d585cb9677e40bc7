#!/usr/bin/env python3
"""History Grouper entry point."""

import os
import sys
import logging

from history_grouper.config import Config, load_config, load_yaml_config
from history_grouper.grouper import HistoryGrouper
from history_grouper.reader import read_lines, write_grouped
from history_grouper.stats import HistoryStats, format_stats_json, format_stats_text, summarize

LOG_FORMAT = "%(asctime)s [GROUPER] %(levelname)s %(message)s"

logger = logging.getLogger(__name__)


def run(config: Config) -> HistoryStats:
    """Read, group, sort and write the history described by *config*.

    Raises OSError when the input can't be read or the output can't be
    written; nothing is written in either case.
    """
    lines = read_lines(config.history_file)

    grouper = HistoryGrouper(exclude_fields=config.exclude_fields)
    grouped = grouper.group_and_sort(lines)
    write_grouped(config.output_file, grouped, indent=config.indent)

    stats = summarize(grouped, skipped_lines=grouper.parse_errors)
    logger.info("Grouped %d entries into %d session(s), %d line(s) skipped",
                stats.total_entries, stats.total_sessions, stats.skipped_lines)
    return stats


def main() -> int:
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, stream=sys.stderr)

    try:
        config = load_config(load_yaml_config(os.environ.get("CONFIG_PATH")))
    except ValueError as e:
        logger.error("Error: %s", e)
        return 1
    logging.getLogger().setLevel(config.log_level)

    try:
        stats = run(config)
    except OSError as e:
        logger.error("Error: %s", e)
        return 1

    if config.report_format == "json":
        print(format_stats_json(stats))
    else:
        print(format_stats_text(stats, config.output_file))
    return 0


if __name__ == "__main__":
    sys.exit(main())
