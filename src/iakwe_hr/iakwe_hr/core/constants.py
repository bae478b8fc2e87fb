"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Year-agnostic public holidays of the Marshall Islands: (month, day, name).
# Gospel Day is approximate: every holiday keeps one fixed date.
PUBLIC_HOLIDAYS: tuple[tuple[int, int, str], ...] = (
    (1, 1, "New Year's Day"),
    (3, 1, "Nuclear Victims Remembrance Day"),
    (5, 1, "Constitution Day"),
    (7, 1, "Fisherman's Day"),
    (9, 27, "Gospel Day"),
    (10, 21, "Independence Day"),
    (12, 25, "Christmas Day"),
)

NOT_APPLICABLE = "Not Applicable"

CULTURAL_CONTEXTS: tuple[str, ...] = (
    NOT_APPLICABLE,
    "Kemem Celebrations",
    "Funeral/Mourning Period",
    "Irooj Obligations",
    "Traditional Healing",
    "Gospel Day Observance",
    "Nuclear Victims Remembrance",
    "Independence Day Activities",
    "Fisherman's Day Participation",
    "Constitution Day Events",
    "Other Cultural Event",
)

CULTURAL_GUIDANCE = {
    "Kemem Celebrations": "First birthday celebrations are significant family events requiring cultural participation.",
    "Funeral/Mourning Period": "Immediate family members are typically granted 3-5 days for funeral and mourning obligations.",
    "Irooj Obligations": "Community participation in traditional ceremonies led by chiefs is an important cultural responsibility.",
    "Traditional Healing": "Traditional healing practices are recognized as valid cultural leave reasons.",
}

FULL_TIME = "Full-time"
ANNUAL_ENTITLEMENT_FULL_TIME = 20
ANNUAL_ENTITLEMENT_OTHER = 10
SICK_ENTITLEMENT = 10
CULTURAL_ENTITLEMENT = 5

DEFAULT_LIST_LIMIT = 200
DEFAULT_ORDER = "-created_at"

LEAVE_REQUESTS_TABLE = "leave_requests"
LEAVE_COMMENTS_TABLE = "leave_comments"
EMPLOYEES_TABLE = "employees"
