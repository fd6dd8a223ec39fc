"""Pytest configuration and shared fixtures."""

import pytest

from hub_search.retrieval.aggregator import SearchAggregator
from hub_search.storage.memory_store import InMemoryStore

MENTOR_ROWS = [
    {
        "id": "m1",
        "user_id": "u-m1",
        "name": "Career Mentor",
        "title": "Software Engineer",
        "bio": "Helping new grads land their first job",
        "expertise": ["python", "career", "interviews", "leadership"],
        "price_cents": 5000,
        "city": "Addis Ababa",
        "avatar_url": "https://img.example.com/m1.png",
        "is_verified": True,
        "rating_avg": 4.8,
        "available": True,
    },
    {
        "id": "m2",
        "user_id": "u-m2",
        "name": "Selam Bekele",
        "title": "Product Designer",
        "bio": "Design mentor for early startups",
        "expertise": ["ux", "figma"],
        "price_cents": 0,
        "city": "Nairobi",
        "avatar_url": None,
        "is_verified": False,
        "rating_avg": None,
        "available": True,
    },
    {
        "id": "m3",
        "user_id": "u-m3",
        "name": "Hidden Mentor",
        "title": "Retired",
        "bio": None,
        "expertise": None,
        "price_cents": None,
        "city": None,
        "avatar_url": None,
        "is_verified": False,
        "rating_avg": None,
        "available": False,
    },
]

MATCH_ROWS = [
    {
        "id": "p1",
        "user_id": "u-p1",
        "name": "Abebe",
        "display_name": "Abe",
        "bio": "Software engineer who loves hiking",
        "seeking": "Long-term relationship",
        "interests": ["hiking", "coffee", "music", "travel"],
        "city": "Seattle",
        "photos": ["https://img.example.com/p1.jpg"],
        "active": True,
    },
    {
        "id": "p2",
        "user_id": "u-p2",
        "name": "Hana",
        "display_name": None,
        "bio": "Nurse and runner",
        "seeking": None,
        "interests": [],
        "city": None,
        "photos": [],
        "active": True,
    },
]

LISTING_ROWS = [
    {
        "id": "l1",
        "title": "Desk lamp",
        "description": "looking for a mentor",
        "category": "services",
        "city": "Addis Ababa",
        "price_cents": 2500,
        "images": ["https://img.example.com/l1.jpg"],
        "status": "active",
    },
    {
        "id": "l2",
        "title": "Shared housing near campus",
        "description": "Two bedroom apartment",
        "category": "housing",
        "city": "Seattle",
        "price_cents": 120000,
        "images": [],
        "status": "active",
    },
    {
        "id": "l3",
        "title": "Career Mentor handbook",
        "description": "Already sold",
        "category": "books",
        "city": "Seattle",
        "price_cents": 1500,
        "images": [],
        "status": "sold",
    },
]


def make_store() -> InMemoryStore:
    """Build a store seeded with the sample rows."""
    return InMemoryStore(
        {
            "mentors": MENTOR_ROWS,
            "match_profiles": MATCH_ROWS,
            "listings": LISTING_ROWS,
        }
    )


@pytest.fixture
def store():
    """In-memory store seeded with mentors, match profiles and listings."""
    return make_store()


@pytest.fixture
def aggregator(store):
    """Aggregator over the seeded store with default adapters."""
    return SearchAggregator.from_store(store)
