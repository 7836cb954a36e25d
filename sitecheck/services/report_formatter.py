from typing import List

from sitecheck.domain.crawl_result import CrawlReport, CrawlResult


def format_result(result: CrawlResult) -> str:
    if result.error is not None:
        return f"[BROKEN] {result.url} -> Error: {result.error_message}"
    if result.is_broken:
        return f"[BROKEN] {result.url} -> HTTP {result.status}"
    return f"[OK] {result.url} -> HTTP {result.status}"


def format_broken_entry(result: CrawlResult) -> str:
    if result.error is not None:
        return f" - {result.url} ({result.error_message})"
    return f" - {result.url} (Status: {result.status})"


def format_report(report: CrawlReport) -> List[str]:
    """Render one line per result followed by the broken-link summary."""
    lines = [format_result(r) for r in report.results]
    broken = report.broken
    if not broken:
        lines.append("No broken links found!")
        return lines
    lines.append(f"Found {len(broken)} broken links:")
    lines.extend(format_broken_entry(r) for r in broken)
    return lines
