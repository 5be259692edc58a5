"""
Fixed lookup tables for browsing TMDB.
"""

# TMDB keyword and genre ids queried for each mood.
MOOD_MAP = {
    "happy": {"keywords": [9715, 9717], "genres": [35, 10751]},  # comedy, family
    "sad": {"keywords": [9748, 9714], "genres": [18]},  # drama
    "adventurous": {"keywords": [9716], "genres": [12, 28]},  # adventure, action
    "romantic": {"keywords": [9748], "genres": [10749]},  # romance
    "scary": {"keywords": [9718], "genres": [27, 53]},  # horror, thriller
    "inspiring": {"keywords": [9715], "genres": [18, 36]},  # drama, history
    "relaxing": {"keywords": [9716], "genres": [35, 10751]},  # comedy, family
    "thoughtful": {"keywords": [9714], "genres": [18, 99]},  # drama, documentary
}

LANGUAGE_CODES = {
    "english": "en",
    "hindi": "hi",
    "spanish": "es",
    "french": "fr",
    "japanese": "ja",
    "korean": "ko",
    "chinese": "zh",
    "german": "de",
    "italian": "it",
    "portuguese": "pt",
    "russian": "ru",
    "turkish": "tr",
}

GENRES = {
    28: "Action",
    35: "Comedy",
    18: "Drama",
    27: "Horror",
    10749: "Romance",
    878: "Science Fiction",
}

FILM_INDUSTRIES = {
    "US": "Hollywood",
    "IN": "Bollywood",
    "KR": "Korean Cinema",
    "JP": "Japanese Cinema",
    "HK": "Hong Kong Cinema",
    "GB": "British Cinema",
}


def film_industry(details: dict) -> str:
    """Industry label from the first production company's country."""
    companies = details.get("production_companies") or []
    country = companies[0].get("origin_country") if companies else None
    return FILM_INDUSTRIES.get(country, "International")
