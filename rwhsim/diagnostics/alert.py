import logging
from rwhsim.diagnostics.diagnostics import DiagnosticTracker

logger = logging.getLogger(__name__)
def alert(tracker: DiagnosticTracker) -> None:
    """Alert if there are significant diagnostic issues."""
    if not tracker:
        return

    issues = tracker.get_results()
    if issues.empty:
        logger.info("No water balance violations found")
        return

    for issue_type in issues['issue_type'].unique():
        type_issues = issues[issues['issue_type'] == issue_type]
        logger.warning("%d %s violations in %d capacities (max magnitude: %.3e)",
                       len(type_issues), issue_type,
                       type_issues['capacity'].nunique(),
                       type_issues['value'].abs().max())
