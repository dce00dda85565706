"""Table and CSV renderings of bulk operation summaries."""

from __future__ import annotations

import csv
from typing import TextIO

from systool.records import BulkResult, BulkSummary
from systool.table import Table
from systool.textfmt import format_duration, format_timestamp, truncate


def _outcome(result: BulkResult) -> str:
    if result.success:
        return "Success"
    return "Failed" if result.error is None else str(result.error)


def bulk_summary_table(summary: BulkSummary, writer: TextIO) -> None:
    """Write the totals of a bulk run and a table of per-domain results."""
    writer.write("\n📋 Bulk Operation Summary\n")
    writer.write(
        f"📊 Total: {summary.total_domains} | ✅ Success: {summary.successful} | ❌ Failed: {summary.failed}\n"
    )
    writer.write(f"⏱️  Duration: {format_duration(summary.duration)}\n\n")

    if not summary.results:
        writer.write("No results to display.\n")
        return

    table = Table(["Domain", "Status", "Result", "Duration"])
    for result in summary.results:
        table.add_row(
            [
                truncate(result.domain, 30),
                "✅ OK" if result.success else "❌ ERROR",
                truncate(_outcome(result), 40),
                format_duration(result.duration),
            ]
        )
    table.render(writer)


def bulk_summary_csv(summary: BulkSummary, writer: TextIO) -> None:
    """Write the per-domain results of a bulk run as CSV."""
    out = csv.writer(writer, lineterminator="\n")
    out.writerow(["Domain", "Status", "Success", "Error", "StartTime", "EndTime", "Duration"])
    for result in summary.results:
        error = "" if result.success or result.error is None else str(result.error)
        out.writerow(
            [
                result.domain,
                "success" if result.success else "error",
                "true" if result.success else "false",
                error,
                format_timestamp(result.start_time),
                format_timestamp(result.end_time),
                format_duration(result.duration),
            ]
        )