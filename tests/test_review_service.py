import asyncio
from datetime import datetime, timezone

import pytest

from product_reviews_api.app.core.errors import PersistenceError, ValidationError
from product_reviews_api.app.services.review_service import ReviewService


class BrokenStore:
    def __init__(self, exc):
        self.exc = exc
        self.calls = 0

    async def append(self, candidate):
        self.calls += 1
        raise self.exc


def test_valid_submission_is_stored(store):
    service = ReviewService(store)
    before = datetime.now(timezone.utc)

    review = asyncio.run(service.submit_review({"productId": "123", "rating": "5", "comment": "great"}))

    assert review.created_at >= before
    stored = asyncio.run(store.list_all())
    assert len(stored) == 1
    assert stored[0].rating == 5
    assert stored[0].comment == "great"
    assert stored[0].product_id == "123"
    assert stored[0].id == review.id


def test_each_submission_gets_a_fresh_id(store):
    service = ReviewService(store)

    async def scenario():
        return [
            await service.submit_review({"productId": "123", "rating": str(n), "comment": "ok"})
            for n in range(1, 6)
        ]

    reviews = asyncio.run(scenario())
    assert len({r.id for r in reviews}) == 5


def test_invalid_rating_is_rejected_without_storing(store, reviews_path):
    service = ReviewService(store)

    with pytest.raises(ValidationError) as exc:
        asyncio.run(service.submit_review({"productId": "123", "rating": "6", "comment": "great"}))

    assert "rating" in exc.value.fields
    assert not reviews_path.exists()


def test_invalid_submission_leaves_existing_collection_unchanged(store):
    service = ReviewService(store)
    asyncio.run(service.submit_review({"productId": "123", "rating": "4", "comment": "fine"}))

    with pytest.raises(ValidationError) as exc:
        asyncio.run(service.submit_review({"productId": "", "rating": "9", "comment": ""}))

    assert exc.value.fields == ["productId", "rating", "comment"]
    assert len(asyncio.run(store.list_all())) == 1


def test_validation_happens_before_store_is_touched():
    broken = BrokenStore(OSError("disk gone"))
    with pytest.raises(ValidationError):
        asyncio.run(ReviewService(broken).submit_review({"rating": "3"}))
    assert broken.calls == 0


def test_store_os_errors_become_persistence_errors():
    service = ReviewService(BrokenStore(OSError("read-only file system")))
    with pytest.raises(PersistenceError):
        asyncio.run(service.submit_review({"productId": "1", "rating": "3", "comment": "ok"}))


def test_persistence_errors_pass_through():
    original = PersistenceError("Review collection is unreadable")
    service = ReviewService(BrokenStore(original))
    with pytest.raises(PersistenceError) as exc:
        asyncio.run(service.submit_review({"productId": "1", "rating": "3", "comment": "ok"}))
    assert exc.value is original


def test_list_reviews_optionally_filters_by_product(store):
    service = ReviewService(store)

    async def scenario():
        await service.submit_review({"productId": "1", "rating": "5", "comment": "a"})
        await service.submit_review({"productId": "2", "rating": "4", "comment": "b"})
        return await service.list_reviews(), await service.list_reviews("2")

    everything, only_two = asyncio.run(scenario())
    assert [r.comment for r in everything] == ["a", "b"]
    assert [r.comment for r in only_two] == ["b"]
