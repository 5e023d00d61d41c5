"""Fixed sample records that seed the in-memory mock store."""

from datetime import datetime, timezone

from models.chapter import Chapter
from models.novel import Genre, Novel


def _date(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


MOCK_GENRES: list[Genre] = [
    Genre(id="1", name="Fantasy"),
    Genre(id="2", name="Science Fiction"),
    Genre(id="3", name="Romance"),
    Genre(id="4", name="Mystery"),
    Genre(id="5", name="Horror"),
    Genre(id="6", name="Adventure"),
    Genre(id="7", name="Historical"),
]

MOCK_NOVELS: list[Novel] = [
    Novel(
        id="1",
        title="The Crystal Kingdom",
        description="A young mage discovers her powers in a world where magic is forbidden.",
        image_url="https://images.unsplash.com/photo-1518744386442-2d48ac47a7eb",
        genres=[MOCK_GENRES[0], MOCK_GENRES[5]],
        created_at=_date(2023, 6, 12),
        updated_at=_date(2023, 7, 14),
    ),
    Novel(
        id="2",
        title="Starship Odyssey",
        description="The last survivors of Earth embark on a journey to find a new home.",
        image_url="https://images.unsplash.com/photo-1501862700950-18382cd41497",
        genres=[MOCK_GENRES[1], MOCK_GENRES[5]],
        created_at=_date(2023, 4, 22),
        updated_at=_date(2023, 5, 30),
    ),
    Novel(
        id="3",
        title="Midnight Detective",
        description="A detective with unusual methods solves crimes in a corrupt city.",
        image_url="https://images.unsplash.com/photo-1509347528160-9a9e33742cdb",
        genres=[MOCK_GENRES[3]],
        created_at=_date(2023, 2, 5),
        updated_at=_date(2023, 3, 15),
    ),
    Novel(
        id="4",
        title="Love in Paris",
        description="Two strangers meet in Paris and their lives are changed forever.",
        image_url="https://images.unsplash.com/photo-1502602898657-3e91760cbb34",
        genres=[MOCK_GENRES[2], MOCK_GENRES[6]],
        created_at=_date(2023, 8, 19),
        updated_at=_date(2023, 9, 2),
    ),
]

MOCK_CHAPTERS: list[Chapter] = [
    Chapter(
        id="1",
        novel_id="1",
        title="The Beginning",
        content=(
            "In a world where magic flowed like water, young Elara discovered her powers "
            "at the age of twelve. It was during the Festival of Lights, when the entire "
            "village gathered to celebrate the annual return of the glowing crystal "
            "butterflies. Without warning, she felt a strange tingling in her fingertips, "
            "and Elara knew in that moment that her life would never be the same..."
        ),
        order=1,
        created_at=_date(2023, 6, 12),
        updated_at=_date(2023, 6, 12),
    ),
    Chapter(
        id="2",
        novel_id="1",
        title="The Discovery",
        content=(
            "\"You must hide this gift,\" the elder whispered urgently, pulling Elara away "
            "from the crowd. \"Magic has been forbidden in the kingdom for decades.\" That "
            "night, Elara learned the dark history of her homeland, and with trembling "
            "hands but resolute spirit she agreed to learn in secret..."
        ),
        order=2,
        created_at=_date(2023, 6, 15),
        updated_at=_date(2023, 6, 15),
    ),
    Chapter(
        id="3",
        novel_id="1",
        title="The Training",
        content=(
            "For months, Elara met with the elder, whose name she learned was Thorne, in a "
            "hidden cave beneath the ancient oak tree at the edge of the village. \"Magic "
            "is not separate elements,\" he said. \"It is the harmony between them.\" For "
            "the first time, she wasn't afraid of her gift; she embraced it..."
        ),
        order=3,
        created_at=_date(2023, 6, 20),
        updated_at=_date(2023, 6, 20),
    ),
    Chapter(
        id="4",
        novel_id="2",
        title="Launch Day",
        content=(
            "The countdown echoed through the massive launch facility, each number bringing "
            "humanity closer to its most desperate gamble. Captain Sarah Chen stood on the "
            "bridge of the Starship Odyssey, her eyes fixed on the viewscreen showing Earth. "
            "\"Initiate final launch sequence,\" she ordered, and the Odyssey's engines "
            "roared to life..."
        ),
        order=1,
        created_at=_date(2023, 4, 22),
        updated_at=_date(2023, 4, 22),
    ),
]
