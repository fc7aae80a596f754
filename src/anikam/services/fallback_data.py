"""Bundled fallback catalog.

A small hand-curated set of already normalized records shown on primary
browsing surfaces when the upstream cannot be reached. Built at import
time; no network or file access.
"""

from __future__ import annotations

from typing import Any

from anikam.shared.constants import AgeRatingTable, MediaLimits, MediaText
from anikam.shared.models import Genre, MediaStatus, MediaType, UnifiedMedia


def _media(synopsis: str, **fields: Any) -> UnifiedMedia:
    description = fields.pop("description", None) or (
        synopsis[: MediaLimits.DESCRIPTION_LENGTH] + MediaText.ELLIPSIS
    )
    fields.setdefault("title_english", fields["title"])
    fields.setdefault("age_rating", AgeRatingTable.NOT_RATED)
    fields.setdefault("mal_score", fields.get("rating"))
    return UnifiedMedia(description=description, synopsis=synopsis, **fields)


FALLBACK_MEDIA: tuple[UnifiedMedia, ...] = (
    _media(
        id="16498",
        title="Attack on Titan",
        title_japanese="進撃の巨人",
        description=(
            "Humanity fights for survival against giant humanoid Titans that "
            "have breached their last safe haven."
        ),
        synopsis=(
            "Centuries ago, mankind was slaughtered to near extinction by monstrous "
            "humanoid creatures called Titans, forcing humans to hide in fear behind "
            "enormous concentric walls. When a colossal Titan breaches the outer wall, "
            "the fight for survival against the man-eating giants begins again."
        ),
        type=MediaType.ANIME,
        status=MediaStatus.COMPLETED,
        genres=(Genre.ACTION, Genre.DRAMA, Genre.FANTASY, Genre.HORROR),
        release_year=2013,
        end_year=2023,
        episodes=87,
        seasons=4,
        duration=24,
        rating=9.0,
        popularity=1,
        trailer="MGRm4IzK1SQ",
        studio="Studio Pierrot",
        director="Tetsuro Araki",
        source="Manga",
        platforms=("Crunchyroll", "Funimation", "Hulu", "Netflix"),
        tags=("Military", "Post-Apocalyptic", "Survival", "Tragedy"),
        age_rating="R",
    ),
    _media(
        id="21",
        title="One Piece",
        title_japanese="ワンピース",
        description=(
            "Follow Monkey D. Luffy and his pirate crew in search of the ultimate "
            "treasure known as One Piece."
        ),
        synopsis=(
            "Gol D. Roger was known as the Pirate King, the strongest and most "
            "infamous being to have sailed the Grand Line. His last words before his "
            "execution revealed the existence of the greatest treasure in the world, "
            "One Piece, and brought about the Grand Age of Pirates."
        ),
        type=MediaType.ANIME,
        status=MediaStatus.AIRING,
        genres=(Genre.ACTION, Genre.ADVENTURE, Genre.COMEDY, Genre.DRAMA),
        release_year=1999,
        episodes=1000,
        seasons=21,
        duration=24,
        rating=9.2,
        popularity=2,
        trailer="Ades3pQbeh8",
        studio="Toei Animation",
        source="Manga",
        platforms=("Crunchyroll", "Funimation", "Netflix"),
        tags=("Pirates", "Friendship", "Adventure", "Shounen"),
        age_rating="PG-13",
    ),
    _media(
        id="38000",
        title="Demon Slayer",
        title_english="Demon Slayer: Kimetsu no Yaiba",
        title_japanese="鬼滅の刃",
        description="A young boy becomes a demon slayer to avenge his family and cure his sister.",
        synopsis=(
            "Ever since the death of his father, the burden of supporting the family "
            "has fallen upon Tanjirou Kamado's shoulders. One night he learns of the "
            "flesh-eating demons that lurk in the woods, and his life changes forever."
        ),
        type=MediaType.ANIME,
        status=MediaStatus.AIRING,
        genres=(Genre.ACTION, Genre.SUPERNATURAL, Genre.HISTORICAL),
        release_year=2019,
        episodes=44,
        seasons=3,
        duration=24,
        rating=8.7,
        popularity=3,
        trailer="VQGCKyvzIM4",
        studio="Ufotable",
        director="Haruo Sotozaki",
        source="Manga",
        platforms=("Crunchyroll", "Funimation", "Netflix", "Hulu"),
        tags=("Demons", "Family", "Sword Fighting", "Shounen"),
        age_rating="R",
    ),
    _media(
        id="31964",
        title="My Hero Academia",
        title_japanese="僕のヒーローアカデミア",
        description=(
            "In a world where most people have superpowers, a powerless boy enrolls "
            "in a hero academy."
        ),
        synopsis=(
            "The appearance of quirks, newly discovered super powers, has been "
            "steadily increasing over the years. Izuku Midoriya is one of the few "
            "without one, yet he wants nothing more than to be a hero."
        ),
        type=MediaType.ANIME,
        status=MediaStatus.AIRING,
        genres=(Genre.ACTION, Genre.ADVENTURE, Genre.SCHOOL, Genre.SUPERNATURAL),
        release_year=2016,
        episodes=138,
        seasons=6,
        duration=24,
        rating=8.5,
        popularity=4,
        trailer="D5fYOnwYkj4",
        studio="Studio Bones",
        director="Kenji Nagasaki",
        source="Manga",
        platforms=("Crunchyroll", "Funimation", "Hulu"),
        tags=("Heroes", "School", "Superpowers", "Shounen"),
        age_rating="PG-13",
    ),
    _media(
        id="40748",
        title="Jujutsu Kaisen",
        title_japanese="呪術廻戦",
        description="A student joins a secret organization of sorcerers to eliminate cursed spirits.",
        synopsis=(
            "Although Yuji Itadori looks like your average teenager, his immense "
            "physical strength is something to behold. When his occult club breaks "
            "the seal on a cursed object, he is pulled into the world of sorcerers."
        ),
        type=MediaType.ANIME,
        status=MediaStatus.AIRING,
        genres=(Genre.ACTION, Genre.SUPERNATURAL, Genre.SCHOOL),
        release_year=2020,
        episodes=24,
        seasons=2,
        duration=24,
        rating=8.8,
        popularity=5,
        trailer="4A_X-Dvl0ws",
        studio="MAPPA",
        director="Sunghoo Park",
        source="Manga",
        platforms=("Crunchyroll", "Funimation"),
        tags=("Curses", "School", "Dark Fantasy", "Shounen"),
        age_rating="R",
    ),
    _media(
        id="30276",
        title="One Punch Man",
        description=(
            "A superhero who can defeat any enemy with a single punch searches for "
            "a worthy opponent."
        ),
        synopsis=(
            "Saitama has trained so hard that he can defeat any enemy with a single "
            "punch, which leaves him bored and searching for a worthy opponent."
        ),
        type=MediaType.ANIME,
        status=MediaStatus.AIRING,
        genres=(Genre.ACTION, Genre.COMEDY, Genre.SUPERNATURAL),
        release_year=2015,
        episodes=24,
        duration=24,
        rating=8.9,
        popularity=6,
        studio="Madhouse",
        source="Web manga",
        platforms=("Crunchyroll", "Hulu"),
        tags=("Parody", "Super Power", "Seinen"),
        age_rating="R",
    ),
    _media(
        id="1535",
        title="Death Note",
        description=(
            "A high school student finds a supernatural notebook that grants the "
            "power to kill."
        ),
        synopsis=(
            "Light Yagami finds a notebook dropped by a god of death. Anyone whose "
            "name is written in it dies, and Light sets out to rid the world of "
            "criminals, drawing the attention of the detective L."
        ),
        type=MediaType.ANIME,
        status=MediaStatus.COMPLETED,
        genres=(Genre.PSYCHOLOGICAL, Genre.SUPERNATURAL, Genre.THRILLER),
        release_year=2006,
        end_year=2007,
        episodes=37,
        duration=23,
        rating=9.0,
        popularity=7,
        studio="Madhouse",
        source="Manga",
        platforms=("Crunchyroll", "Netflix"),
        tags=("Detective", "Psychological", "Shounen"),
        age_rating="R",
    ),
    _media(
        id="20",
        title="Naruto",
        description=(
            "A young ninja seeks recognition from his peers and dreams of becoming "
            "the village leader."
        ),
        synopsis=(
            "Naruto Uzumaki, a mischievous adolescent ninja, struggles as he "
            "searches for recognition and dreams of becoming the Hokage, the "
            "village's leader and strongest ninja."
        ),
        type=MediaType.ANIME,
        status=MediaStatus.COMPLETED,
        genres=(Genre.ACTION, Genre.ADVENTURE, Genre.DRAMA),
        release_year=2002,
        end_year=2007,
        episodes=220,
        duration=23,
        rating=8.4,
        popularity=8,
        studio="Studio Pierrot",
        source="Manga",
        platforms=("Crunchyroll", "Hulu"),
        tags=("Martial Arts", "Shounen"),
        age_rating="PG-13",
    ),
    _media(
        id="33327",
        title="Tokyo Ghoul",
        description=(
            "A college student becomes half-ghoul after a chance encounter with one "
            "of these flesh-eating creatures."
        ),
        synopsis=(
            "Ken Kaneki survives an attack by a ghoul only to wake up as a half-ghoul "
            "himself, caught between the world of humans and the creatures that "
            "feed on them."
        ),
        type=MediaType.MANGA,
        status=MediaStatus.COMPLETED,
        genres=(Genre.ACTION, Genre.HORROR, Genre.SUPERNATURAL),
        release_year=2011,
        end_year=2014,
        chapters=143,
        volumes=14,
        rating=8.6,
        popularity=9,
        author="Sui Ishida",
        platforms=("MyAnimeList", "MangaPlus", "Viz Media"),
        tags=("Gore", "Seinen", "Based on Manga"),
    ),
    _media(
        id="116778",
        title="Chainsaw Man",
        description="A young man fuses with his pet devil to become a chainsaw-wielding hero.",
        synopsis=(
            "Denji is a teenage boy living with a chainsaw devil named Pochita. "
            "After being betrayed and killed, he fuses with Pochita and returns as "
            "Chainsaw Man."
        ),
        type=MediaType.MANGA,
        status=MediaStatus.AIRING,
        genres=(Genre.ACTION, Genre.HORROR, Genre.SUPERNATURAL),
        release_year=2018,
        chapters=97,
        volumes=11,
        rating=8.8,
        popularity=10,
        author="Tatsuki Fujimoto",
        platforms=("MyAnimeList", "MangaPlus", "Viz Media"),
        tags=("Gore", "Shounen", "Based on Manga"),
    ),
)


def get_fallback_media(media_type: MediaType | str | None = None) -> list[UnifiedMedia]:
    """Return the fallback records, optionally restricted to one media type."""
    if media_type is None:
        return list(FALLBACK_MEDIA)
    wanted = MediaType(media_type)
    return [media for media in FALLBACK_MEDIA if media.type is wanted]
