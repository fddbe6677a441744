# Tool definition for adding a time entry from a natural-language description
schema = {
    "type": "function",
    "function": {
        "name": "add_time_entry",
        "description": (
            "Add a time entry to Harvest. Supports natural language like "
            "\"meet with Austin for 30m\" or \"2h development on API\". The project "
            "and task are matched automatically when not given."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "description": {"type": "string", "description": "Natural language description of the time entry, including duration (e.g., '30m meeting with Austin')"},
                "project": {"type": "string", "description": "Project name or code (optional, will be inferred from description)"},
                "date": {"type": "string", "description": "Date for the entry (optional, defaults to today). Can be 'today', 'yesterday', 'last friday' or YYYY-MM-DD"}
            },
            "required": ["description"]
        }
    }
}
