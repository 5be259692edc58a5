"""
REST API over the record store, repositories, session store and TMDB client.
"""
