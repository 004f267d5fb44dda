"""
Application command definitions and Discord protocol constants.
"""

# Interaction types
INTERACTION_PING = 1
INTERACTION_APPLICATION_COMMAND = 2

# Interaction callback types
CALLBACK_PONG = 1
CALLBACK_DEFERRED_CHANNEL_MESSAGE = 5

# Command types
COMMAND_CHAT_INPUT = 1
COMMAND_MESSAGE = 3

OPTION_STRING = 3

CONTEXT_GUILD = 0
CONTEXT_PRIVATE_CHANNEL = 2

EPHEMERAL_FLAG = 1 << 6
ADMINISTRATOR_PERMISSION = "8"

TRANSLATE_MESSAGE_COMMAND = "Translate Message"
TRANSLATE_COMMAND = "translate"

COMMANDS = [
    {
        "name": TRANSLATE_MESSAGE_COMMAND,
        "type": COMMAND_MESSAGE,
        "contexts": [CONTEXT_GUILD, CONTEXT_PRIVATE_CHANNEL],
    },
    {
        "name": TRANSLATE_COMMAND,
        "type": COMMAND_CHAT_INPUT,
        "description": "Translate a provided message into the specified language",
        "default_member_permissions": ADMINISTRATOR_PERMISSION,
        "contexts": [CONTEXT_GUILD, CONTEXT_PRIVATE_CHANNEL],
        "options": [
            {
                "name": "message",
                "description": "The message text to translate",
                "type": OPTION_STRING,
                "required": True,
            },
            {
                "name": "language",
                "description": "Target language (e.g. english, spanish)",
                "type": OPTION_STRING,
                "required": True,
            },
        ],
    },
]
