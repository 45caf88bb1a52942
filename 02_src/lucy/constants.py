"""User-facing texts of the chat surface."""

INTRO_MESSAGE = (
    "Hi, I'm Lucy, your creative companion! Tell me what you'd like to make: "
    "an image, a short video, a song. You can also attach pictures or audio "
    "for me to work from."
)

PLACEHOLDER_PROMPTS = [
    "Draw a cozy cabin in a snowy forest at night",
    "Make a 5 second video of waves crashing at sunset",
    "Compose a calm lo-fi track for studying",
    "Turn my photo into a watercolor painting",
    "Create a poster for a summer music festival",
]

SEND_FAILED_TEXT = (
    "Sorry, something went wrong while working on that. Please try again."
)

GENERIC_FAILURE_TEXT = "Something went wrong. Please reload the chat and try again."

HISTORY_FAILED_TEXT = "Could not load your chat history."
CHAT_LOAD_FAILED_TEXT = "Could not open this chat."
