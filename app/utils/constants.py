"""
Constants for the citizen workflow, benefit tiers and report labels.
"""

# Citizen workflow statuses, in canonical display order
CITIZEN_STATUSES = [
    "Encoded",
    "Validated",
    "Cleanlisted",
    "Waitlisted",
    "Paid",
    "Unpaid",
    "Compliance",
    "Disqualified",
]

# Key used for each status in payment and geography tables
STATUS_KEYS = {status: status.lower() for status in CITIZEN_STATUSES}

SEXES = ["Male", "Female"]

# Staff positions
ADMIN_POSITIONS = ["Administrator", "NCSC Admin"]
SCOPED_POSITIONS = ["PDO", "LGU"]
STAFF_POSITIONS = ADMIN_POSITIONS + SCOPED_POSITIONS
STAFF_STATUSES = ["Active", "Inactive"]

# Milestone ages that qualify for an ECA cash gift
BENEFIT_AGES = [80, 85, 90, 95, 100]
CENTENARIAN_AGE = 100

# Age tiers: (min, max, label); the top tier is open-ended
AGE_TIERS = [
    (80, 84, "80"),
    (85, 89, "85"),
    (90, 94, "90"),
    (95, 99, "95"),
    (100, None, "100+"),
]
AGE_TIER_LABELS = [label for _, _, label in AGE_TIERS]

# Birth-year lookup for births from 1929 onward: last digit -> calendar year
CALENDAR_YEAR_BY_LAST_DIGIT = {
    4: 2024, 9: 2024,
    0: 2025, 5: 2025,
    1: 2026, 6: 2026,
    2: 2027, 7: 2027,
    3: 2028, 8: 2028,
}
CENTENARIAN_CUTOFF_BIRTH_YEAR = 1928

MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

QUARTER_LABELS = ["Q1", "Q2", "Q3", "Q4"]

# ECA application type per milestone age; one application per type per citizen
ECA_TYPES = {
    80: "octogenarian_80",
    85: "octogenarian_85",
    90: "nonagenarian_90",
    95: "nonagenarian_95",
    100: "centenarian_100",
}
ECA_STATUSES = ["Applied", "Validated", "Paid", "Unpaid", "Disqualified"]
ECA_FIRST_YEAR = 2024

# Citizen statuses that can receive a new ECA application
ECA_APPLICANT_STATUSES = ["Encoded", "Validated", "Cleanlisted", "Paid", "Unpaid"]
