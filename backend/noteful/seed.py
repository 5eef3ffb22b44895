"""
Noteful Backend: Seed Data
==========================

What:  A fixed set of folders, tags and notes, plus a loader.
How:   Documents carry fixed ids and staggered timestamps so tests can refer
       to them directly and listing order is deterministic.
Who:   The test suite (before every test) and developers filling a fresh
       database: `python -m noteful.seed`.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import async_session_factory, create_all, dispose_engine
from noteful.models import Folder, Note, Tag

logger = logging.getLogger(__name__)

# Seed documents are dated relative to this instant, one minute apart
SEED_EPOCH = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

SEED_FOLDERS: List[Dict[str, Any]] = [
    {"id": "111111111111111111111100", "name": "Archive"},
    {"id": "111111111111111111111101", "name": "Drafts"},
    {"id": "111111111111111111111102", "name": "Personal"},
    {"id": "111111111111111111111103", "name": "Work"},
]

SEED_TAGS: List[Dict[str, Any]] = [
    {"id": "222222222222222222222200", "name": "foo"},
    {"id": "222222222222222222222201", "name": "bar"},
    {"id": "222222222222222222222202", "name": "baz"},
    {"id": "222222222222222222222203", "name": "qux"},
]

SEED_NOTES: List[Dict[str, Any]] = [
    {
        "id": "000000000000000000000000",
        "title": "5 life lessons learned from cats",
        "content": "Cats nap whenever they can and never apologize for it.",
        "folder_id": "111111111111111111111100",
        "tags": ["222222222222222222222200"],
    },
    {
        "id": "000000000000000000000001",
        "title": "What the government doesn't want you to know about cats",
        "content": "They were never really domesticated.",
        "folder_id": "111111111111111111111100",
        "tags": ["222222222222222222222200", "222222222222222222222201"],
    },
    {
        "id": "000000000000000000000002",
        "title": "The most boring article about cats you'll ever read",
        "content": "Cats sleep. Then they sleep some more.",
        "folder_id": "111111111111111111111101",
        "tags": ["222222222222222222222201"],
    },
    {
        "id": "000000000000000000000003",
        "title": "7 things Lady Gaga has in common with cats",
        "content": "Both have an outfit for every occasion.",
        "folder_id": "111111111111111111111102",
        "tags": ["222222222222222222222202"],
    },
    {
        "id": "000000000000000000000004",
        "title": "The most incredible article about cats you'll ever read",
        "content": "Posture, patience and the perfect pounce.",
        "folder_id": "111111111111111111111103",
        "tags": [],
    },
    {
        "id": "000000000000000000000005",
        "title": "10 ways cats can help you live to 100",
        "content": "Purring lowers your blood pressure. Probably.",
        "folder_id": None,
        "tags": ["222222222222222222222200", "222222222222222222222203"],
    },
]


def _stamp(index: int) -> Dict[str, datetime]:
    moment = SEED_EPOCH + timedelta(minutes=index)
    return {"created_at": moment, "updated_at": moment}


async def seed_database(session: AsyncSession) -> None:
    """
    Insert the seed folders, tags and notes on `session` and commit.

    Expects empty collections; fixed ids collide with existing documents.
    """
    folders = [Folder(**doc, **_stamp(i)) for i, doc in enumerate(SEED_FOLDERS)]
    tags = {doc["id"]: Tag(**doc, **_stamp(i)) for i, doc in enumerate(SEED_TAGS)}
    session.add_all(folders)
    session.add_all(tags.values())

    for i, doc in enumerate(SEED_NOTES):
        fields = {key: value for key, value in doc.items() if key != "tags"}
        note = Note(**fields, **_stamp(i))
        note.tags = [tags[tag_id] for tag_id in doc["tags"]]
        session.add(note)

    await session.commit()
    logger.info(
        "Seeded %d folders, %d tags, %d notes",
        len(SEED_FOLDERS), len(SEED_TAGS), len(SEED_NOTES),
    )


async def main() -> None:
    await create_all()
    async with async_session_factory() as session:
        await seed_database(session)
    await dispose_engine()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    asyncio.run(main())
