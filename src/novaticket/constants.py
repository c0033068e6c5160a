"""Storage keys, enums and limits shared across novaticket."""

TICKETS_KEY = "ticketapp_tickets"
SESSION_KEY = "ticketapp_session"
USERS_KEY = "ticketapp_users"

TOPIC_TICKETS = "tickets-changed"
TOPIC_SESSION = "session-changed"

STATUSES = ("open", "in_progress", "closed")
PRIORITIES = ("low", "medium", "high", "critical")
STATUS_FILTER_ALL = "all"

DEFAULT_STATUS = "open"
DEFAULT_PRIORITY = "medium"

TITLE_MIN = 5
TITLE_MAX = 100
DESCRIPTION_MAX = 500

STATUS_LABELS = {
    "open": "Open",
    "in_progress": "In Progress",
    "closed": "Closed",
}

# Fixed sample tickets written on first load or after corruption.
SEED_TICKETS = (
    {
        "title": "Login page not responsive on mobile",
        "description": "The login form overflows on screens smaller than 375px",
        "status": "open",
        "priority": "high",
    },
    {
        "title": "Database connection timeout",
        "description": "Users experiencing timeout errors during peak hours",
        "status": "in_progress",
        "priority": "critical",
    },
)
