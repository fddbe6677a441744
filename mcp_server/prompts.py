"""Guidance prompts built on the interpreter's extraction rules.

These never resolve anything against Harvest; they only describe what an
``add_time_entry`` call would receive.
"""
from datetime import date, timedelta
from typing import Any, Optional

from .errors import UnrecognizedOperation
from .interpreter import extract_date, extract_duration, extract_project_hint, extract_task_hint

PROMPTS = [
    {
        "name": "discover",
        "description": "Discover all capabilities of the Harvest time tracker - start here!",
        "arguments": [],
    },
    {
        "name": "guide",
        "description": "Get personalized time tracking guidance based on your current status",
        "arguments": [],
    },
    {
        "name": "smart_add",
        "description": "Add time entries with intelligent parsing and suggestions",
        "arguments": [
            {
                "name": "description",
                "description": 'Natural language description like "worked on API docs for 2 hours this morning"',
                "required": True,
            }
        ],
    },
    {
        "name": "weekly_review",
        "description": "Analyze your week and identify gaps in time tracking",
        "arguments": [
            {"name": "weeks_back", "description": "Number of weeks to analyze (default: 1)", "required": False}
        ],
    },
    {
        "name": "quick_log",
        "description": "Quick commands for common time entries (meetings, breaks, admin)",
        "arguments": [
            {
                "name": "type",
                "description": "Type of activity: meeting, break, admin, review, standup, lunch, email, planning",
                "required": True,
            },
            {
                "name": "duration",
                "description": "Duration (default: 30m for meetings, 15m for breaks)",
                "required": False,
            },
        ],
    },
]

QUICK_LOG_DEFAULTS: dict[str, str] = {
    "meeting": "30m",
    "break": "15m",
    "admin": "30m",
    "review": "1h",
    "standup": "15m",
    "lunch": "1h",
    "email": "30m",
    "planning": "1h",
}


def discover_prompt() -> str:
    return """🎯 **Harvest Time Tracker MCP Server**

I can help you track time in Harvest with natural language! Here's what I can do:

📚 **Tools Available:**
  • add_time_entry - Add time with natural language like "30m meeting with Austin"
  • list_recent_entries - Show time entries from the past N days
  • get_today_total - See how many hours you've logged today

🎯 **Smart Prompts for Workflows:**
  • discover - This guide showing all capabilities
  • guide - Get personalized suggestions based on your time tracking
  • smart_add - Intelligently parse complex time descriptions
  • weekly_review - Analyze your week and find missing time
  • quick_log - Fast shortcuts for common activities

💡 **Examples to Try:**
  • "Add 2 hours working on API documentation"
  • "Show me this week's time entries"
  • "Quick log a meeting"
  • "I worked on the presentation for 3 hours yesterday morning"
  • "How many hours have I logged today?"

🚀 **Quick Start:**
First, check your current status with "get_today_total", then use "guide" for personalized suggestions!

The system understands:
  - Durations: 30m, 2h, 1.5 hours, 90 minutes
  - Dates: today, yesterday, "last Tuesday", 6/3, 2025-06-03
  - Projects: Will match based on keywords
  - Common tasks: meeting, development, documentation, review"""


def guide_prompt() -> str:
    return """📊 **Time Tracking Guide**

To see your current status and get personalized suggestions:

1. First run: "get_today_total" to see today's hours
2. Then run: "list_recent_entries 7" to see this week
3. Based on the results, I'll help you:
   - Fill in any gaps
   - Log current work
   - Quick-add common activities

**Common Scenarios:**

🎯 Just finished something?
  → Use: "add 1h finished the API documentation"

🎯 In a meeting now?
  → Use: "quick_log meeting" (defaults to 30m)

🎯 Forgot yesterday?
  → Use: "add 3h worked on client presentation yesterday"

🎯 Multiple activities?
  → Use smart_add for each:
    "smart_add worked 2h on bug fixes this morning"
    "smart_add 1h team meeting after lunch"

💡 **Pro Tips:**
  - Log time as you go for accuracy
  - Use descriptive notes for future reference
  - Check weekly_review every Friday
  - Set reminders to log time before leaving"""


def smart_add_prompt(description: str, today: date) -> str:
    description = description or ""
    _, duration_text = extract_duration(description)
    spent_date, date_label = extract_date(description, today)
    project_hint = extract_project_hint(description)
    task_hint = extract_task_hint(description)

    call = [
        "add_time_entry with:",
        f'- description: "{description}"',
        f'- date: "{spent_date.isoformat()}"',
    ]
    if project_hint:
        call.append(f'- project: "{project_hint}"')
    call_text = "\n".join(call)

    looking_for = f' (looking for "{project_hint}")' if project_hint else ""
    likely = f' (likely "{task_hint}")' if task_hint else ""
    return f"""🤖 **Smart Add Analysis**

From: "{description}"

I understand you want to add:
  • Duration: {duration_text or '1 hour (default)'}
  • Date: {date_label} ({spent_date.isoformat()})
  • Project hint: {project_hint or 'Will auto-detect'}
  • Task type: {task_hint or 'Will auto-detect'}

To add this entry, use:
```
{call_text}
```

The system will:
1. Find the best matching project{looking_for}
2. Select appropriate task type{likely}
3. Create the time entry with your full description as notes

💡 **Tips for better matching:**
  - Include project name or code: "2h on GoodCode feature"
  - Specify task type: "1h meeting with client"
  - Add date context: "worked yesterday afternoon\""""


def weekly_review_prompt(weeks_back: int, today: date) -> str:
    start = today - timedelta(days=weeks_back * 7)
    span = "this week" if weeks_back == 1 else f"the last {weeks_back} weeks"
    return f"""📊 **Weekly Review Guide**

To analyze {span}:

1. Run: "list_recent_entries {weeks_back * 7}"
2. This will show all entries from {start.isoformat()} to {today.isoformat()}

**What to look for:**
  • Days with less than 8 hours
  • Missing time blocks (lunch, afternoon, etc.)
  • Projects that need more time logged
  • Patterns in your work schedule

**Common gaps to check:**
  ❓ Monday morning startup time
  ❓ Friday afternoon wrap-up
  ❓ Meeting time not logged
  ❓ Quick tasks and interruptions
  ❓ Code review and PR time

**After reviewing, fill gaps with:**
  • "add 1h morning standup on Monday"
  • "add 2h code review for API project yesterday"
  • "add 30m responded to emails on Tuesday"

💡 **Weekly targets:**
  - Aim for 40 hours/week
  - Log time same day for accuracy
  - Include all billable activities
  - Don't forget internal meetings"""


def quick_log_prompt(activity: str, duration: Optional[str] = None) -> str:
    key = (activity or "").strip().lower()
    if key not in QUICK_LOG_DEFAULTS:
        valid = ", ".join(QUICK_LOG_DEFAULTS)
        return f"""❓ Unknown quick log type: "{activity}"

Valid types: {valid}

Examples:
  • "quick_log meeting" - 30m meeting
  • "quick_log lunch" - 1h lunch break
  • "quick_log standup" - 15m standup
  • "quick_log review 2h" - 2h code review

You can also specify custom duration:
  • "quick_log meeting 45m"
  • "quick_log admin 2h\""""

    actual = duration or QUICK_LOG_DEFAULTS[key]
    project = "Will use your main project" if key in ("meeting", "standup") else "Internal/Admin"
    others = "\n".join(
        [f"  • quick_log {name} ({default})" for name, default in QUICK_LOG_DEFAULTS.items() if name != key][:5]
    )
    return f"""⚡ **Quick Log: {key}**

Ready to add:
  • Type: {key}
  • Duration: {actual}
  • Date: Today
  • Project: {project}

To confirm, use:
```
add_time_entry with:
- description: "{key} - {actual}"
- date: "today"
```

**Other quick logs:**
{others}

💡 Tip: You can always add more detail:
"add 30m team meeting about new feature design\""""


def _weeks(value: Any) -> int:
    try:
        weeks = int(value)
    except (TypeError, ValueError):
        return 1
    return weeks if weeks > 0 else 1


def handle_prompt(name: str, args: dict[str, Any] | None = None, today: Optional[date] = None) -> str:
    args = args or {}
    today = today or date.today()
    if name == "discover":
        return discover_prompt()
    if name == "guide":
        return guide_prompt()
    if name == "smart_add":
        return smart_add_prompt(str(args.get("description") or ""), today)
    if name == "weekly_review":
        return weekly_review_prompt(_weeks(args.get("weeks_back")), today)
    if name == "quick_log":
        return quick_log_prompt(str(args.get("type") or ""), args.get("duration") or None)
    raise UnrecognizedOperation("prompt", name)
