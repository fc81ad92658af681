"""Terminal report for ``skillint lint``."""

from __future__ import annotations

from collections import Counter

from skillint.constants.branding import ASCII_LOGO_LINES, LINT_SUMMARY_TITLE
from skillint.constants.config import (
    RULE_DISABLE_SOURCE_CLI_DISABLE,
    RULE_DISABLE_SOURCE_CLI_ONLY,
    RULE_DISABLE_SOURCE_CONFIG,
)
from skillint.constants.reporting import (
    ANSI_DIM,
    ANSI_RESET,
    HEADER_LABEL_WIDTH,
    RULE_LIST_LIMIT,
    SEVERITY_COLORS,
    STATUS_COLORS,
    TABLE_COLUMNS,
    TOP_RULES_LIMIT,
)
from skillint.constants.scoring import SEVERITY_ORDER, SEVERITY_RANK
from skillint.linter.stats import finding_sort_key, rule_counts, status_for
from skillint.model import Finding, LintResult
from skillint.reporting.filters import OutputFilters, filter_findings
from skillint.types import RuleDisableSource, Severity

DISABLE_SOURCE_ORDER = (RULE_DISABLE_SOURCE_CONFIG, RULE_DISABLE_SOURCE_CLI_DISABLE, RULE_DISABLE_SOURCE_CLI_ONLY)


def _location(finding: Finding) -> str:
    if finding.evidence.line is None:
        return finding.evidence.path
    return f"{finding.evidence.path}:{finding.evidence.line}"


def top_rules(counts: dict[str, int], limit: int = TOP_RULES_LIMIT) -> str:
    """``RULE n · RULE n`` for the most frequent rules, ties broken by id."""
    if not counts:
        return "none"
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    parts = [f"{rule_id} {count}" for rule_id, count in ranked[:limit]]
    if len(ranked) > limit:
        parts.append(f"(+{len(ranked) - limit} more)")
    return " · ".join(parts)


def rule_list(rule_ids: tuple[str, ...], limit: int = RULE_LIST_LIMIT) -> str:
    if len(rule_ids) <= limit:
        return ", ".join(rule_ids)
    return f"{', '.join(rule_ids[:limit])}, +{len(rule_ids) - limit} more"


def disable_source_counts(disable_sources: dict[str, RuleDisableSource]) -> str:
    counts = Counter(disable_sources.values())
    parts = [f"{source} {counts[source]}" for source in DISABLE_SOURCE_ORDER if counts[source]]
    return " · ".join(parts) or "none"


class StdoutReporter:
    """Render a ``LintResult`` as a summary header plus a findings listing.

    ``min_severity`` only hides findings from the listing; the header still
    reports the real totals next to the shown count.
    """

    def __init__(
        self,
        result: LintResult,
        *,
        color: bool = True,
        verbose: bool = False,
        group_by: str | None = None,
        min_severity: Severity | None = None,
        summary_only: bool = False,
        fail_on: Severity | None = None,
        exit_code: int = 0,
    ) -> None:
        self._result = result
        self._color = color
        self._verbose = verbose
        self._group_by = group_by
        self._summary_only = summary_only
        self._fail_on = fail_on
        self._exit_code = exit_code
        self._filters = OutputFilters(min_severity=min_severity)
        self._shown = filter_findings(result.findings, self._filters)

    def render(self) -> str:
        sections = [self._header()]
        if not self._summary_only and self._shown:
            sections.append(self._grouped() if self._group_by else self._table())
        if self._verbose and self._result.warnings:
            sections.append("\n".join(["  Warnings", *(f"    - {warning}" for warning in self._result.warnings)]))
        return "\n".join(sections)

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{ANSI_RESET}" if self._color and color else text

    def _severity(self, severity: str) -> str:
        return self._paint(severity, SEVERITY_COLORS.get(severity, ""))

    def _header(self) -> str:
        rows = self._header_rows()
        rule = "  " + "─" * 38
        lines = ["", *(f"  {line}" for line in ASCII_LOGO_LINES), f"  {LINT_SUMMARY_TITLE}", rule, ""]
        lines.extend(f"  {label:<{HEADER_LABEL_WIDTH}}{value}" for label, value in rows)
        lines.append("")
        return "\n".join(lines)

    def _header_rows(self) -> list[tuple[str, str]]:
        r = self._result
        status = status_for(list(r.findings))
        with_findings = len({finding.skill for finding in r.findings})
        rows = [
            ("Status", self._paint(status, STATUS_COLORS[status])),
            (
                "Files",
                f"{r.files_linted} linted ({r.skill_count} skills, {r.document_count} docs)"
                f" / {with_findings} with findings",
            ),
        ]

        if self._filters.active():
            hidden = max(0, r.total_findings - len(self._shown))
            rows.append(
                (
                    "Findings",
                    f"{len(self._shown)} shown / {r.total_findings} total "
                    f"({hidden} below {self._filters.min_severity} filtered)",
                )
            )
        else:
            rows.append(("Findings", str(r.total_findings)))

        breakdown = " · ".join(
            f"{r.counts_by_severity.get(severity, 0)} {self._severity(severity)}"  # type: ignore[call-overload]
            for severity in SEVERITY_ORDER
        )
        rows.append(("Severities", breakdown))
        rows.append(("Top rules", top_rules(r.counts_by_rule or rule_counts(list(r.findings)))))
        if self._filters.active():
            rows.append(("Top shown", top_rules(rule_counts(self._shown))))

        if r.active_rule_overrides:
            rows.append(
                (
                    "Overrides",
                    ", ".join(f"{rule_id} (severity={sev})" for rule_id, sev in sorted(r.active_rule_overrides.items())),
                )
            )
        if r.rules_executed:
            rows.append(("Rules run", f"{len(r.rules_executed)} ({rule_list(r.rules_executed)})"))
        if r.rules_disabled:
            rows.append(("Rules off", f"{len(r.rules_disabled)} ({rule_list(r.rules_disabled)})"))
        if r.disable_sources:
            rows.append(("Off source", disable_source_counts(r.disable_sources)))
        if r.warnings and not self._verbose:
            rows.append(("Warnings", f"{len(r.warnings)} (use --verbose to list)"))
        if self._fail_on is not None:
            rows.append(("Verdict", self._verdict(self._fail_on)))
        rows.append(("Duration", f"{r.duration_seconds:.3f}s"))
        return rows

    def _verdict(self, fail_on: Severity) -> str:
        threshold = SEVERITY_RANK[fail_on]
        matched = sum(1 for finding in self._result.findings if SEVERITY_RANK[finding.severity] >= threshold)
        clause = f"{matched} finding(s) >= {fail_on}" if matched else f"no findings >= {fail_on}"
        return f"{'FAIL' if self._exit_code == 1 else 'PASS'} ({clause})"

    def _table(self) -> str:
        def border(left: str, mid: str, right: str) -> str:
            return "  " + left + mid.join("─" * (width + 2) for _, width in TABLE_COLUMNS) + right

        def row(cells: list[str]) -> str:
            return "  │ " + " │ ".join(cells) + " │"

        lines = [
            "  Findings",
            border("┌", "┬", "┐"),
            row([f"{heading:<{width}}" for heading, width in TABLE_COLUMNS]),
            border("├", "┼", "┤"),
        ]
        (_, w_skill), (_, w_rule), (_, w_sev) = TABLE_COLUMNS
        for finding in self._shown:
            # Pad before painting so escape codes do not break alignment.
            severity = self._paint(f"{finding.severity:<{w_sev}}", SEVERITY_COLORS.get(finding.severity, ""))
            lines.append(row([f"{finding.skill:<{w_skill}}", f"{finding.rule_id:<{w_rule}}", severity]))
            if self._verbose:
                lines.append(f"  │   {self._paint(f'{_location(finding)}  {finding.title}', ANSI_DIM)}")
        lines.append(border("└", "┴", "┘"))
        return "\n".join(lines)

    def _grouped(self) -> str:
        """List findings under one heading per skill or rule, worst group first."""
        by_skill = self._group_by == "skill"
        groups: dict[str, list[Finding]] = {}
        for finding in self._shown:
            groups.setdefault(finding.skill if by_skill else finding.rule_id, []).append(finding)

        worst = {key: max(SEVERITY_RANK[f.severity] for f in members) for key, members in groups.items()}
        rank_to_severity = {rank: severity for severity, rank in SEVERITY_RANK.items()}

        lines = [f"  Findings (grouped by {self._group_by})", ""]
        for key in sorted(groups, key=lambda k: (-worst[k], k)):
            members = groups[key]
            lines.append(f"  [{key}]  worst={self._severity(rank_to_severity[worst[key]])}  findings={len(members)}")
            for finding in sorted(members, key=finding_sort_key):
                label = finding.rule_id if by_skill else finding.skill
                lines.append(f"    {label:<25}  {self._severity(finding.severity):<8}  {_location(finding)}")
            lines.append("")
        return "\n".join(lines)
