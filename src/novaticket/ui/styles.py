"""Rich styles for ticket status and priority badges."""

STATUS_STYLES = {
    "open": "bold green",
    "in_progress": "bold yellow",
    "closed": "dim",
}

PRIORITY_STYLES = {
    "low": "dim",
    "medium": "",
    "high": "bold yellow",
    "critical": "bold red",
}
