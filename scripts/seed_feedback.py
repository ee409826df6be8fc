"""Seed a running feedback service with sample submissions.

Usage (after `pip install -e .`):
    python scripts/seed_feedback.py

Targets FEEDBACK_API_URL (default http://localhost:5000).
"""

import asyncio
import sys

from app.clients.feedback_api import FeedbackApiClient, FeedbackApiError
from app.config import settings

SAMPLE_FEEDBACK = [
    {"name": "Priya Nair", "email": "priya@campus.edu", "eventName": "Intro to Rust", "eventType": "Workshop", "rating": 5, "comments": "Hands-on and well paced."},
    {"name": "Tom Becker", "email": "tom.becker@campus.edu", "eventName": "Intro to Rust", "eventType": "Workshop", "rating": 4, "comments": "Good, slides could be shared earlier."},
    {"name": "Ana Souza", "email": "ana@campus.edu", "eventName": "Career Fair", "eventType": "Fair", "rating": 3, "comments": "Too crowded around noon."},
    {"name": "Lee Min", "email": "lee.min@campus.edu", "eventName": "AI Ethics Panel", "eventType": "Talk", "rating": 2, "comments": "Audio was hard to follow."},
    {"name": "Sam Okoro", "email": "sam@campus.edu", "eventName": "Spring Hackathon", "eventType": "Hackathon", "rating": 5, "comments": "Great mentors and food."},
    {"name": "Jo Park", "email": "jo.park@campus.edu", "eventName": "AI Ethics Panel", "eventType": "Talk", "rating": 1, "comments": "Started 40 minutes late."},
]


async def seed() -> None:
    client = FeedbackApiClient(base_url=settings.feedback_api_url)
    try:
        for item in SAMPLE_FEEDBACK:
            try:
                await client.submit_feedback(item)
            except FeedbackApiError as e:
                print(f"Rejected {item['eventName']}: {e}")
                sys.exit(1)
        stats = await client.get_feedback_stats()
    finally:
        await client.close()

    print(f"Seeded {len(SAMPLE_FEEDBACK)} submissions at {settings.feedback_api_url}")
    print(f"Sentiment: {stats['positive']} positive, {stats['neutral']} neutral, {stats['negative']} negative")


if __name__ == "__main__":
    asyncio.run(seed())
