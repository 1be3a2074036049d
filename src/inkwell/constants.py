"""Fixed vocabularies shared by the models, schemas, and services."""

POST_CATEGORIES = (
    "Technology",
    "Design",
    "Business",
    "Lifestyle",
    "Health",
    "Travel",
    "Food",
    "Fashion",
    "Sports",
    "Entertainment",
)
DEFAULT_CATEGORY = "Technology"

USER_AVATARS = (
    "user-circle",
    "user-check",
    "user-plus",
    "user-x",
    "user-minus",
    "crown",
    "star",
    "heart",
    "smile",
    "coffee",
)
DEFAULT_AVATAR = "user-circle"

# Name of the cookie carrying the session token
SESSION_COOKIE = "token"
