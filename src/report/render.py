"""Text and JSON renderings of a violation list."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

import orjson

from rules.violations import Severity

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rules.violations import Violation

TOP_RULES = 5


def render_text(violations: Sequence[Violation]) -> str:
    """Render violations for a terminal, grouped by severity."""
    if not violations:
        return "No architecture violations found\n"

    by_severity: dict[Severity, list[Violation]] = {s: [] for s in Severity}
    for violation in violations:
        by_severity[violation.severity].append(violation)

    lines = [
        "Architecture Analysis Results",
        "=============================",
        f"Total violations: {len(violations)}",
    ]
    lines.extend(
        f"{severity.value.upper()}: {len(items)}"
        for severity, items in by_severity.items()
        if items
    )
    lines.append("")

    for severity, items in by_severity.items():
        if not items:
            continue
        lines.append(f"[{severity.value.upper()}] {len(items)} violations:")
        for violation in items:
            lines.append(
                f"  - {violation.rule_id}: {violation.message} at {violation.location}"
            )
            if violation.suggestion:
                lines.append(f"    hint: {violation.suggestion}")
        lines.append("")

    lines.append("Most violated rules:")
    counts = Counter(v.rule_id for v in violations)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    lines.extend(
        f"  - {rule_id}: {count} violations" for rule_id, count in ranked[:TOP_RULES]
    )
    return "\n".join(lines) + "\n"


def render_json(violations: Sequence[Violation]) -> bytes:
    """Render violations as a JSON document with a per-severity summary."""
    counts = Counter(v.severity.value for v in violations)
    payload = {
        "total": len(violations),
        "summary": {s.value: counts.get(s.value, 0) for s in Severity},
        "violations": [v.model_dump(mode="json") for v in violations],
    }
    opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    return orjson.dumps(payload, option=opts)


__all__ = ["render_json", "render_text"]
