"""Tests for UnifiedMedia and the Jikan envelope models."""

import pytest
from pydantic import ValidationError

from anikam.shared.models import (
    Genre,
    JikanPage,
    MediaStatus,
    MediaType,
    Pagination,
    UnifiedMedia,
)


def _media(**overrides):
    fields = {
        "id": "1",
        "title": "Cowboy Bebop",
        "description": "Bounty hunters in space...",
        "synopsis": "Bounty hunters in space.",
        "type": MediaType.ANIME,
        "status": MediaStatus.COMPLETED,
        "release_year": 1998,
        "platforms": ("Crunchyroll",),
        "age_rating": "R",
    }
    fields.update(overrides)
    return UnifiedMedia(**fields)


class TestUnifiedMedia:
    def test_is_frozen(self):
        media = _media()

        with pytest.raises(ValidationError):
            media.title = "Trigun"

    @pytest.mark.parametrize("media_id", ["", "   "])
    def test_blank_id_rejected(self, media_id):
        with pytest.raises(ValidationError):
            _media(id=media_id)

    def test_platforms_required(self):
        with pytest.raises(ValidationError):
            _media(platforms=())

    def test_genre_and_tag_caps(self):
        with pytest.raises(ValidationError):
            _media(genres=tuple(Genre)[:7])
        with pytest.raises(ValidationError):
            _media(tags=tuple(f"tag {i}" for i in range(9)))

    def test_json_dump(self):
        data = _media(genres=(Genre.SCI_FI,)).model_dump(mode="json")

        assert data["type"] == "anime"
        assert data["genres"] == ["Sci-Fi"]
        assert data["chapters"] is None


class TestJikanPage:
    def test_has_next_page(self):
        assert JikanPage(pagination=Pagination(has_next_page=True)).has_next_page
        assert not JikanPage().has_next_page

    def test_pagination_ignores_unknown_fields(self):
        pagination = Pagination.model_validate(
            {"last_visible_page": 3, "has_next_page": True, "extra": 1}
        )

        assert pagination.last_visible_page == 3
