# Tool definition for listing recent time entries
schema = {
    "type": "function",
    "function": {
        "name": "list_recent_entries",
        "description": "List recent Harvest time entries grouped by day, newest first.",
        "parameters": {
            "type": "object",
            "properties": {
                "days": {"type": "integer", "description": "Number of days to look back (default: 7)"}
            }
        }
    }
}
