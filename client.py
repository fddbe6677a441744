import os, json, sys, requests, openai, readline
from dotenv import load_dotenv
from tools import schemas as functions

# Load environment variables from .env file
load_dotenv()

MCP_URL = os.getenv("MCP_URL", "http://localhost:8000")

# Check for OpenAI API key
if not os.getenv("OPENAI_API_KEY"):
    print("❌ OpenAI API key not found!")
    print("Please set your OpenAI API key in your .env file:")
    print("OPENAI_API_KEY=your-api-key-here")
    sys.exit(1)

SYSTEM_PROMPT = (
    "You are an assistant that logs time to Harvest. Pass the user's own wording as the "
    "'description' of add_time_entry, including any duration such as '30m' or '2h'. Only "
    "set 'project' or 'date' when the user names them explicitly."
)
CONFIRM_WORDS = ['yes', 'y', 'confirm', 'ok', 'proceed', 'yup', 'yeah', 'sure', 'go ahead']
CANCEL_WORDS = ['no', 'n', 'cancel', 'abort', 'stop']

messages = [{"role": "system", "content": SYSTEM_PROMPT}]

# Initialize OpenAI client
client = openai.OpenAI()


def call_tool(name: str, args: dict) -> dict:
    r = requests.post(f"{MCP_URL}/tools/{name}", json=args, timeout=60)
    r.raise_for_status()
    return r.json()


def preview(description: str) -> str:
    r = requests.post(f"{MCP_URL}/prompts/smart_add", json={"description": description}, timeout=10)
    r.raise_for_status()
    return r.json()["text"]


def confirm_entry(args: dict) -> bool:
    """Show the smart_add analysis and ask before anything is written to Harvest."""
    print("\n" + "=" * 60)
    print("📋 TIME ENTRY CONFIRMATION")
    print("=" * 60)
    try:
        print(preview(args.get("description", "")))
    except requests.RequestException as e:
        print(f"⚠️  Warning: Could not fetch preview: {e}")
        print(f"📝 Description: {args.get('description', 'N/A')}")
    if args.get("project"):
        print(f"📁 Project override: {args['project']}")
    if args.get("date"):
        print(f"📅 Date override: {args['date']}")
    print("=" * 60)
    print("Please confirm this time entry:")
    print("• Type 'yes', 'y', 'confirm' to proceed")
    print("• Type 'no', 'n', 'cancel' to cancel")
    print("• Type corrections (e.g., 'make it 45 minutes' or 'it was yesterday')")
    print("=" * 60)
    answer = input("Your response: ").strip().lower()
    if answer in CONFIRM_WORDS:
        return True
    if answer in CANCEL_WORDS:
        print("❌ Time entry cancelled.")
        return False
    # Corrections restart the conversation so the model re-plans from scratch
    print(f"🔄 Processing correction: '{answer}'")
    messages[1:] = []
    chat(f"Please correct the time entry ({args.get('description', '')}): {answer}")
    return False


def chat(user_input: str):
    messages.append({"role": "user", "content": user_input})
    resp = client.chat.completions.create(
        model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        messages=messages,
        tools=functions,
        tool_choice="auto"
    )
    msg = resp.choices[0].message
    messages.append(msg)

    if not msg.tool_calls:
        print(msg.content)
        return

    for tool_call in msg.tool_calls:
        name = tool_call.function.name
        args = json.loads(tool_call.function.arguments or "{}")
        print(f"↳ OpenAI called {name} with {args}")

        if name == "add_time_entry" and not confirm_entry(args):
            content = "The user did not confirm this entry."
        else:
            try:
                res = call_tool(name, args)
                print(res["text"])
                content = res["text"]
            except requests.RequestException as e:
                print("❌ MCP error:", e)
                content = f"Error: {e}"
        if any(m is msg for m in messages):
            messages.append({"role": "tool", "tool_call_id": tool_call.id, "content": content})


if __name__ == "__main__":
    try:
        while True:
            chat(input("You: "))
    except (EOFError, KeyboardInterrupt):
        sys.exit()
