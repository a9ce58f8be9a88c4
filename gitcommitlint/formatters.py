"""Rendering of lint reports for the terminal or for machines."""
import json
from typing import List, Optional, Sequence

from rich.text import Text

from .models import LintReport, Severity

INPUT_SIGN = "⧗"
ERROR_SIGN = "✖"
WARNING_SIGN = "⚠"
SUCCESS_SIGN = "✔"
HELP_SIGN = "ⓘ"


def _render_report(report: LintReport, verbose: bool) -> Optional[Text]:
    if report.ignored:
        if not verbose:
            return None
        text = Text()
        text.append(f"{INPUT_SIGN}   input: ", style="bold")
        text.append(report.input.strip().split("\n")[0])
        text.append(f"\n{SUCCESS_SIGN}   ignored\n", style="dim")
        return text

    if report.valid and not report.warnings and not verbose:
        return None

    text = Text()
    text.append(f"{INPUT_SIGN}   input: ", style="bold")
    text.append(report.input.strip().split("\n")[0] if report.input.strip() else "")
    text.append("\n")

    if report.parse_error:
        text.append(f"{ERROR_SIGN}   {report.parse_error}\n", style="red")
        return text

    for violation in report.violations:
        if violation.severity == Severity.ERROR:
            text.append(f"{ERROR_SIGN}   ", style="red")
        else:
            text.append(f"{WARNING_SIGN}   ", style="yellow")
        text.append(violation.message)
        text.append(f" [{violation.rule}]\n", style="dim")

    sign, style = (ERROR_SIGN, "red") if report.errors else (
        (WARNING_SIGN, "yellow") if report.warnings else (SUCCESS_SIGN, "green")
    )
    text.append("\n")
    text.append(
        f"{sign}   found {len(report.errors)} problems, {len(report.warnings)} warnings\n",
        style=style,
    )
    return text


def render_text(
    reports: Sequence[LintReport],
    help_url: Optional[str] = None,
    verbose: bool = False,
) -> Text:
    """Render reports in the commitlint style.

    Passing and exempted messages are only shown when ``verbose`` is set.
    """
    output = Text()
    for report in reports:
        rendered = _render_report(report, verbose)
        if rendered is not None:
            output.append(rendered)
    if help_url and any(not report.valid for report in reports):
        output.append(f"{HELP_SIGN}   Get help: ", style="bold")
        output.append(f"{help_url}\n")
    return output


def report_to_dict(report: LintReport) -> dict:
    return {
        "input": report.input,
        "valid": report.valid,
        "ignored": report.ignored,
        "parse_error": report.parse_error,
        "errors": [_violation_to_dict(v) for v in report.errors],
        "warnings": [_violation_to_dict(v) for v in report.warnings],
    }


def _violation_to_dict(violation) -> dict:
    return {
        "rule": violation.rule,
        "level": int(violation.severity),
        "severity": violation.severity.label,
        "message": violation.message,
        "line": violation.line,
    }


def render_json(reports: Sequence[LintReport]) -> str:
    results: List[dict] = [report_to_dict(report) for report in reports]
    return json.dumps(
        {
            "valid": all(report.valid for report in reports),
            "errorCount": sum(len(report.errors) for report in reports),
            "warningCount": sum(len(report.warnings) for report in reports),
            "results": results,
        },
        indent=2,
    )
