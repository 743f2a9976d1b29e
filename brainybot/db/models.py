"""Database table name constants and enumerated column values."""

# Table names: single source of truth for Supabase queries
CONVERSATIONS = "chat_conversations"
MESSAGES = "chat_messages"
PROFILES = "user_profiles"

# Role constants
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"

# Message input types
INPUT_TEXT = "text"
INPUT_VOICE = "voice"
INPUT_IMAGE = "image"

# Subjects, in the order the chat header offers them
SUBJECT_GENERAL = "general"
SUBJECTS = ("general", "math", "science", "coding", "history", "language")

DEFAULT_CONVERSATION_TITLE = "New Conversation"

# value -> display label
EDUCATION_LEVELS = {
    "1st": "1st Grade",
    "2nd": "2nd Grade",
    "3rd": "3rd Grade",
    "4th": "4th Grade",
    "5th": "5th Grade",
    "6th": "6th Grade",
    "7th": "7th Grade",
    "8th": "8th Grade",
    "9th": "9th Grade",
    "10th": "10th Grade",
    "11th": "11th Grade",
    "12th": "12th Grade",
    "college": "College",
}
