# Tool definition for today's logged hours
schema = {
    "type": "function",
    "function": {
        "name": "get_today_total",
        "description": "Get the total hours logged in Harvest today, with the individual entries.",
        "parameters": {"type": "object", "properties": {}}
    }
}
