"""
Explicit field validation, run before any write.

Each function returns a list of Violation; an empty list means the input is
acceptable. Field names are the ones used on the wire.
"""
import math
from typing import List, NamedTuple

from .campaign_models import CATEGORIES, STATUSES, TITLE_MAX_LENGTH, DESCRIPTION_MAX_LENGTH
from .models import ROLES

MIN_DONATION = 1
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72  # bcrypt limit


class Violation(NamedTuple):
    field: str
    message: str


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def validate_campaign(data: dict, partial: bool = False) -> List[Violation]:
    """Validate campaign fields.

    With partial=True only the keys present in data are checked (an update
    patch); otherwise every field is required.
    """
    violations = []

    def present(key):
        return not partial or key in data

    if present('title'):
        title = data.get('title')
        if _blank(title):
            violations.append(Violation('title', 'Campaign title is required'))
        elif len(title.strip()) > TITLE_MAX_LENGTH:
            violations.append(Violation('title', f'Title cannot be more than {TITLE_MAX_LENGTH} characters'))

    if present('description'):
        description = data.get('description')
        if _blank(description):
            violations.append(Violation('description', 'Campaign description is required'))
        elif len(description) > DESCRIPTION_MAX_LENGTH:
            violations.append(Violation('description', f'Description cannot be more than {DESCRIPTION_MAX_LENGTH} characters'))

    if present('category'):
        category = data.get('category')
        if _blank(category):
            violations.append(Violation('category', 'Campaign category is required'))
        elif category not in CATEGORIES:
            violations.append(Violation('category', f"Category must be one of: {', '.join(CATEGORIES)}"))

    if present('goal_amount'):
        goal = data.get('goal_amount')
        if goal is None:
            violations.append(Violation('goalAmount', 'Goal amount is required'))
        elif not _is_number(goal) or goal <= 0:
            violations.append(Violation('goalAmount', 'Goal amount must be greater than 0'))

    if 'status' in data:
        if data.get('status') not in STATUSES:
            violations.append(Violation('status', f"Status must be one of: {', '.join(STATUSES)}"))

    return violations


def validate_donation_amount(amount) -> List[Violation]:
    if amount is None:
        return [Violation('amount', 'Donation amount is required')]
    if not _is_number(amount) or amount < MIN_DONATION:
        return [Violation('amount', f'Donation amount must be at least {MIN_DONATION}')]
    return []


def validate_registration(data: dict) -> List[Violation]:
    violations = []
    if _blank(data.get('name')):
        violations.append(Violation('name', 'Name is required'))
    password = data.get('password') or ''
    if len(password) < PASSWORD_MIN_LENGTH:
        violations.append(Violation('password', f'Password must be at least {PASSWORD_MIN_LENGTH} characters'))
    elif len(password.encode('utf-8')) > PASSWORD_MAX_BYTES:
        violations.append(Violation('password', f'Password cannot be longer than {PASSWORD_MAX_BYTES} bytes'))
    if data.get('role') not in ROLES:
        violations.append(Violation('role', f"Role must be one of: {', '.join(ROLES)}"))
    return violations
