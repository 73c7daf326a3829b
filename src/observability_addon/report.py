"""Render verdicts and values documents to the console with Rich."""

from __future__ import annotations

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

from observability_addon.health.models import EvaluationVerdict
from observability_addon.values.models import LoggingValues
from observability_addon.values.options import FeatureOptions, active_branches

REPORT_HEALTHY = """
## {cluster}: healthy
{message}
"""

REPORT_UNHEALTHY = """
## {cluster}: not healthy yet
**Reason:** `{reason}`

{message}
"""

REPORT_BRANCHES = """
## {cluster}: values
**Active branches:** {branches}

**Subscription channel:** {channel}
"""


def build_health_report(cluster: str, verdict: EvaluationVerdict) -> str:
    if verdict.healthy:
        return REPORT_HEALTHY.format(cluster=cluster, message=verdict.message)
    return REPORT_UNHEALTHY.format(
        cluster=cluster,
        reason=verdict.reason.value if verdict.reason else "unknown",
        message=verdict.message,
    )


def print_verdict(cluster: str, verdict: EvaluationVerdict, console: Console | None = None) -> None:
    """Print a health verdict to console using Rich."""
    c = console or Console()
    style = "green" if verdict.healthy else "red"
    c.print(Panel(Markdown(build_health_report(cluster, verdict)), title="Addon Health", border_style=style))


def print_values(
    cluster: str,
    options: FeatureOptions,
    values: LoggingValues,
    console: Console | None = None,
) -> None:
    """Print the active branches and the values document."""
    c = console or Console()
    branches = ", ".join(sorted(b.value for b in active_branches(options))) or "none"
    c.print(
        Panel(
            Markdown(REPORT_BRANCHES.format(cluster=cluster, branches=branches, channel=values.openshift_logging_channel)),
            title="Addon Values",
            border_style="blue",
        )
    )
    c.print_json(values.to_json())
