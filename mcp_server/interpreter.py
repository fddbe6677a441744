"""Turn free-form time descriptions into duration, date and hint values.

Nothing in here raises on odd input: every extractor degrades to a default
(one hour, today, no hint). Each rule table is an ordered list and the first
entry that matches wins, regardless of where in the text it matched.
"""
import logging
import re
from datetime import date, datetime, time, timedelta
from typing import Callable, Optional

from dateutil import parser as date_parser

from .models import InterpretedHints

logger = logging.getLogger(__name__)

DEFAULT_HOURS = 1.0

_NUMBER = r"(\d+(?:\.\d+)?)"

DURATION_PATTERNS: list[tuple[re.Pattern, float]] = [
    (re.compile(_NUMBER + r"\s*(?:hours?|hrs?|h)(?![a-z])", re.I), 1.0),
    (re.compile(_NUMBER + r"\s*(?:minutes?|mins?|m)(?![a-z])", re.I), 1 / 60),
]

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def _yesterday(m: re.Match, today: date) -> date:
    return today - timedelta(days=1)


def _same_day(m: re.Match, today: date) -> date:
    return today


def _last_weekday(m: re.Match, today: date) -> date:
    # "last monday" said on a Monday means a week ago, never today
    days_back = (today.weekday() - WEEKDAYS.index(m.group(1).lower())) % 7 or 7
    return today - timedelta(days=days_back)


def _iso_date(m: re.Match, today: date) -> date:
    return date.fromisoformat(m.group(0))


def _month_day(m: re.Match, today: date) -> date:
    year = int(m.group(3)) if m.group(3) else today.year
    return date(year, int(m.group(1)), int(m.group(2)))


DateRule = tuple[re.Pattern, Callable[[re.Match, date], date]]

DATE_RULES: list[DateRule] = [
    (re.compile(r"\byesterday\b", re.I), _yesterday),
    (re.compile(r"\b(?:today|this morning|this afternoon)\b", re.I), _same_day),
    (re.compile(r"\blast\s+(" + "|".join(WEEKDAYS) + r")\b", re.I), _last_weekday),
    (re.compile(r"\b\d{4}-\d{2}-\d{2}\b"), _iso_date),
    (re.compile(r"\b(\d{1,2})/(\d{1,2})(?:/(\d{4}))?\b"), _month_day),
]

PROJECT_KEYWORDS: list[tuple[str, str]] = [
    ("api", "API"),
    ("good code", "GoodCode"),
    ("goodcode", "GoodCode"),
    ("gc", "GoodCode"),
    ("internal", "Internal"),
    ("client", "Client"),
]

TASK_KEYWORDS: list[tuple[str, str]] = [
    ("meeting", "meeting"),
    ("standup", "meeting"),
    ("documentation", "documentation"),
    ("docs", "documentation"),
    ("bug", "bug fix"),
    ("fix", "bug fix"),
    ("feature", "development"),
    ("review", "code review"),
    ("pr", "code review"),
    ("planning", "planning"),
    ("design", "design"),
    ("email", "admin"),
    ("admin", "admin"),
]


def extract_duration(text: str) -> tuple[float, Optional[str]]:
    """Return ``(hours, matched_text)``; matched_text is None for the default."""
    for pattern, multiplier in DURATION_PATTERNS:
        m = pattern.search(text)
        if m:
            hours = float(m.group(1)) * multiplier
            if hours > 0:
                return hours, m.group(0)
    return DEFAULT_HOURS, None


def extract_date(text: str, today: date) -> tuple[date, str]:
    """Return the resolved date and a short label describing which rule fired."""
    for pattern, resolve in DATE_RULES:
        m = pattern.search(text)
        if not m:
            continue
        try:
            resolved = resolve(m, today)
        except ValueError:
            logger.debug("Ignoring invalid date token '%s'", m.group(0))
            continue
        if resolve is _same_day:
            return resolved, "today"
        return resolved, m.group(0).lower()
    return today, "today"


def _first_keyword(text: str, table: list[tuple[str, str]]) -> Optional[str]:
    lower = text.lower()
    for keyword, hint in table:
        if keyword in lower:
            return hint
    return None


def extract_project_hint(text: str) -> Optional[str]:
    return _first_keyword(text, PROJECT_KEYWORDS)


def extract_task_hint(text: str) -> Optional[str]:
    return _first_keyword(text, TASK_KEYWORDS)


def interpret(text: str, today: Optional[date] = None) -> InterpretedHints:
    today = today or date.today()
    text = text or ""
    hours, _ = extract_duration(text)
    spent_date, _ = extract_date(text, today)
    return InterpretedHints(
        hours=hours,
        spent_date=spent_date,
        project_hint=extract_project_hint(text),
        task_hint=extract_task_hint(text),
    )


def resolve_date_text(text: Optional[str], today: Optional[date] = None) -> date:
    """Resolve an explicitly supplied date argument such as "yesterday",
    "2025-06-03", "6/3" or "June 3rd". Unparseable text means today."""
    today = today or date.today()
    value = (text or "").strip()
    if not value:
        return today
    lower = value.lower()
    if lower == "tomorrow":
        return today + timedelta(days=1)
    for pattern, resolve in DATE_RULES:
        m = pattern.search(value)
        if m:
            try:
                return resolve(m, today)
            except ValueError:
                continue
    try:
        return date_parser.parse(value, fuzzy=True, default=datetime.combine(today, time())).date()
    except (ValueError, OverflowError) as e:
        logger.warning("Could not parse date '%s': %s. Using today's date: %s", value, e, today)
        return today
