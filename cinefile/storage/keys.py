"""
Record key templates.

Keys follow '<kind>_<userId>_<movieId>'. Inside each id the characters
'%' and '_' are percent-encoded so the separator stays unambiguous and a
user prefix never matches another user's records. Ids without those
characters map to themselves.
"""

FAVORITE_PREFIX = "favorite_"
RATING_PREFIX = "rating_"
IDENTITY_KEY = "user"
AUTH_SESSION_KEY = "auth_session"


def encode_component(value: str) -> str:
    return str(value).replace("%", "%25").replace("_", "%5F")


def user_prefix(kind_prefix: str, user_id: str) -> str:
    """Prefix shared by every record of one kind owned by one user."""
    return f"{kind_prefix}{encode_component(user_id)}_"


def record_key(kind_prefix: str, user_id: str, movie_id: str) -> str:
    return f"{user_prefix(kind_prefix, user_id)}{encode_component(movie_id)}"


def favorite_key(user_id: str, movie_id: str) -> str:
    return record_key(FAVORITE_PREFIX, user_id, movie_id)


def rating_key(user_id: str, movie_id: str) -> str:
    return record_key(RATING_PREFIX, user_id, movie_id)
