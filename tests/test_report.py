from __future__ import annotations

import json

from report import render_json, render_text
from rules.violations import Location, Severity, Violation


def _violation(rule_id: str, severity: Severity, suggestion: str | None = None) -> Violation:
    return Violation(
        rule_id=rule_id,
        message=f"{rule_id} broken",
        severity=severity,
        location=Location(file="src/A.java", line=1, symbol="com.app.A"),
        suggestion=suggestion,
    )


def test_render_text_empty() -> None:
    assert render_text([]) == "No architecture violations found\n"


def test_render_text_groups_by_severity_and_ranks_rules() -> None:
    violations = [
        _violation("warn-rule", Severity.WARNING),
        _violation("err-rule", Severity.ERROR, suggestion="fix it"),
        _violation("err-rule", Severity.ERROR),
    ]

    text = render_text(violations)

    assert "Total violations: 3" in text
    assert "ERROR: 2" in text
    assert "WARNING: 1" in text
    assert "INFO:" not in text
    assert text.index("[ERROR] 2 violations:") < text.index("[WARNING] 1 violations:")
    assert "  - err-rule: err-rule broken at src/A.java:1 (com.app.A)" in text
    assert "    hint: fix it" in text
    ranking = text[text.index("Most violated rules:") :]
    assert ranking.index("err-rule: 2 violations") < ranking.index("warn-rule: 1 violations")


def test_render_text_rule_level_location() -> None:
    violation = Violation(
        rule_id="layering",
        message="cycle",
        severity=Severity.ERROR,
        location=Location(file=None, line=0, symbol="a -> b -> a"),
    )

    assert "at <rule>:0 (a -> b -> a)" in render_text([violation])


def test_render_json_summary_and_payload() -> None:
    payload = json.loads(
        render_json([_violation("r1", Severity.INFO), _violation("r2", Severity.ERROR)])
    )

    assert payload["total"] == 2
    assert payload["summary"] == {"error": 1, "warning": 0, "info": 1}
    assert [v["rule_id"] for v in payload["violations"]] == ["r1", "r2"]
    assert payload["violations"][0]["location"] == {
        "file": "src/A.java",
        "line": 1,
        "column": None,
        "symbol": "com.app.A",
    }
