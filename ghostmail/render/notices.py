"""Plain-text status and error notices (sent without markup parsing)."""

CREATING = "⏳ Creating your temporary email..."
CHECKING = "📬 Checking your messages..."
FETCHING_DOMAINS = "🌐 Fetching available domains..."
DELETING_EMAIL = "🗑️ Deleting your current email..."
DELETING_MESSAGE = "🗑️ Deleting message..."
LOADING_MESSAGE = "📖 Loading full message..."

CREATE_FAILED = "❌ Failed to create email. Please try again."
FETCH_MESSAGES_FAILED = "❌ Failed to fetch messages. Please try again."
FETCH_DOMAINS_FAILED = "❌ Failed to fetch domains. Please try again."
DELETE_EMAIL_FAILED = "❌ Failed to delete email. Please try again."
DELETE_MESSAGE_FAILED = "❌ Failed to delete message."
LOAD_MESSAGE_FAILED = "❌ Failed to load full message. It may have been deleted."
CUSTOM_FAILED = "❌ Failed to change email. The name may be taken or the domain unavailable."

NO_SESSION = "❌ No active email session. Use /create to create an email first."
NO_SESSION_TO_DELETE = "❌ No active email session to delete."
MESSAGE_DELETED = "✅ Message deleted successfully!"

CUSTOM_USAGE = (
    "Usage: /custom <username> <domain>\n"
    "Username may contain letters, digits, '.', '_' and '-'. See /domains for the domain list."
)

DELIVERY_FAILED = "❌ Error displaying message content. The message may contain unsupported characters."


def empty_inbox(email_address: str) -> str:
    return f"📭 No messages found in {email_address}\n\nYour inbox is currently empty."
