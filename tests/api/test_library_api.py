"""
API tests for favorites and ratings endpoints.
"""


class TestFavoriteEndpoints:
    """Tests for /api/favorites."""

    def test_requires_sign_in(self, client):
        assert client.get("/api/favorites").status_code == 401

    def test_add_list_remove(self, signed_in):
        r = signed_in.put("/api/favorites/42", json={"tmdbId": 42, "title": "Inception", "posterPath": "/p.jpg"})
        assert r.status_code == 200
        assert r.json() == {"movie_id": "42", "is_favorite": True}

        r = signed_in.get("/api/favorites")
        assert r.json() == [{"movieId": "42", "tmdbId": 42, "title": "Inception", "posterPath": "/p.jpg", "releaseDate": None}]

        assert signed_in.get("/api/favorites/42").json()["is_favorite"] is True

        r = signed_in.delete("/api/favorites/42")
        assert r.json()["is_favorite"] is False
        assert signed_in.get("/api/favorites").json() == []

    def test_favorites_stored_under_user_key(self, signed_in, record_store):
        signed_in.put("/api/favorites/42", json={"tmdbId": 42, "title": "Inception"})
        assert record_store.get("favorite_a@x.com_42")["title"] == "Inception"


class TestRatingEndpoints:
    """Tests for /api/ratings."""

    def payload(self, **overrides):
        body = {"rating": 8, "reviewText": "Great film", "intimacyRating": "Some", "tmdbId": 42, "title": "Inception"}
        body.update(overrides)
        return body

    def test_submit_and_get(self, signed_in):
        r = signed_in.put("/api/ratings/42", json=self.payload())
        assert r.status_code == 200

        r = signed_in.get("/api/ratings/42")
        assert r.status_code == 200
        data = r.json()
        assert data["movieId"] == "42"
        assert data["rating"] == 8
        assert data["reviewText"] == "Great film"
        assert data["intimacyRating"] == "Some"
        assert data["title"] == "Inception"

    def test_review_is_sanitized(self, signed_in, ratings_repo):
        signed_in.put("/api/ratings/42", json=self.payload(reviewText="<b>Great</b><script>x()</script> film"))
        assert ratings_repo.get("a@x.com", "42").review_text == "Great film"

    def test_encoded_script_not_stored_as_markup(self, signed_in, ratings_repo):
        r = signed_in.put(
            "/api/ratings/42",
            json=self.payload(reviewText="&lt;script&gt;alert(1)&lt;/script&gt; fine"),
        )
        assert r.status_code == 200
        stored = ratings_repo.get("a@x.com", "42").review_text
        assert "<" not in stored
        assert stored.endswith("fine")

    def test_integer_rating_stored_as_int(self, signed_in, record_store):
        signed_in.put("/api/ratings/42", json=self.payload(rating=8))
        rating = record_store.get("rating_a@x.com_42")["rating"]
        assert rating == 8
        assert isinstance(rating, int)

    def test_too_long_review_not_persisted(self, signed_in, ratings_repo):
        r = signed_in.put("/api/ratings/42", json=self.payload(reviewText="a" * 1001))
        assert r.status_code == 400
        assert r.json()["detail"] == "Review must be less than 1000 characters"
        assert ratings_repo.get("a@x.com", "42") is None

    def test_profanity_rejected(self, signed_in, monkeypatch):
        monkeypatch.setenv("CINEFILE_PROFANITY_WORDS", "darn")
        r = signed_in.put("/api/ratings/42", json=self.payload(reviewText="Darn it"))
        assert r.status_code == 400
        assert "family-friendly" in r.json()["detail"]

    def test_invalid_rating_and_intimacy(self, signed_in):
        assert signed_in.put("/api/ratings/42", json=self.payload(rating=0)).status_code == 400
        assert signed_in.put("/api/ratings/42", json=self.payload(intimacyRating="")).status_code == 400

    def test_resubmit_overwrites(self, signed_in):
        signed_in.put("/api/ratings/42", json=self.payload())
        signed_in.put("/api/ratings/42", json={"rating": 3, "reviewText": "Meh", "intimacyRating": "Little"})
        data = signed_in.get("/api/ratings/42").json()
        assert data["rating"] == 3
        assert data["title"] is None
        assert len(signed_in.get("/api/ratings").json()) == 1

    def test_missing_rating_404(self, signed_in):
        assert signed_in.get("/api/ratings/999").status_code == 404

    def test_requires_sign_in(self, client):
        assert client.put("/api/ratings/42", json=self.payload()).status_code == 401
