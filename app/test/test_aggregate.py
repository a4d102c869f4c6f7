from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import StorageError
from app.reviews.aggregate import compute_aggregate, recompute_aggregate, round_rating
from app.reviews.schemas import ReviewCreate
from app.reviews.service import create_review, submit_review


def review(rating: int, comments: str = "Delivered on time, good quality") -> ReviewCreate:
    return ReviewCreate(client_name="Meera Shah", rating=rating, comments=comments)


@pytest.mark.parametrize(
    "mean, expected",
    [
        (None, Decimal("0.00")),
        (4, Decimal("4.00")),
        (10 / 3, Decimal("3.33")),
        (11 / 3, Decimal("3.67")),
        (4.125, Decimal("4.13")),
        (Decimal("2.6750000000000000"), Decimal("2.68")),
    ],
)
def test_round_rating(mean, expected):
    assert round_rating(mean) == expected


def test_new_vendor_has_zero_aggregate(db, make_vendor):
    vendor = make_vendor()

    assert compute_aggregate(db, vendor.id) == (Decimal("0.00"), 0)
    assert recompute_aggregate(db, vendor.id) == (Decimal("0.00"), 0)

    db.refresh(vendor)
    assert vendor.average_rating == Decimal("0.00")
    assert vendor.review_count == 0


def test_aggregate_tracks_every_submission(db, make_vendor):
    vendor = make_vendor()
    ratings = [5, 4, 4, 1, 3, 5, 2]

    for i, rating in enumerate(ratings, start=1):
        submit_review(db, vendor.id, review(rating))

        db.refresh(vendor)
        seen = ratings[:i]
        assert vendor.review_count == i
        assert vendor.average_rating == round_rating(Decimal(sum(seen)) / len(seen))


def test_create_review_alone_leaves_aggregate_untouched(db, make_vendor):
    vendor = make_vendor()

    create_review(db, vendor.id, review(5))

    db.refresh(vendor)
    assert vendor.review_count == 0
    assert vendor.average_rating == Decimal("0.00")


def test_submit_returns_fresh_aggregate(db, make_vendor):
    vendor = make_vendor()
    submit_review(db, vendor.id, review(5, "great work on the launch event"))

    result = submit_review(db, vendor.id, review(4, "solid, a little late on setup"))

    assert result.vendor.vendor_id == vendor.id
    assert result.vendor.average_rating == 4.5
    assert result.vendor.review_count == 2
    assert result.review.rating == 4


def test_failed_recompute_is_reported_and_healed_by_next_submission(db, make_vendor, monkeypatch):
    vendor = make_vendor()
    vendor_id = vendor.id
    create_review(db, vendor_id, review(2))

    def broken_execute(*args, **kwargs):
        raise OperationalError("UPDATE vendors", {}, Exception("connection lost"))

    with monkeypatch.context() as m:
        m.setattr(db, "execute", broken_execute)
        with pytest.raises(StorageError):
            recompute_aggregate(db, vendor_id)

    # the review is stored but the aggregate is stale
    db.refresh(vendor)
    assert len(vendor.reviews) == 1
    assert vendor.review_count == 0

    submit_review(db, vendor_id, review(5))

    db.refresh(vendor)
    assert vendor.review_count == 2
    assert vendor.average_rating == Decimal("3.50")


def test_recompute_overwrites_drifted_values(db, make_vendor):
    vendor = make_vendor(average_rating=Decimal("1.00"), review_count=40)
    create_review(db, vendor.id, review(4))
    create_review(db, vendor.id, review(3))

    recompute_aggregate(db, vendor.id)

    db.refresh(vendor)
    assert vendor.review_count == 2
    assert vendor.average_rating == Decimal("3.50")


def test_aggregate_is_per_vendor(db, make_vendor):
    first = make_vendor()
    second = make_vendor()

    submit_review(db, first.id, review(5))
    submit_review(db, second.id, review(1))
    submit_review(db, second.id, review(2))

    db.refresh(first)
    db.refresh(second)
    assert (first.average_rating, first.review_count) == (Decimal("5.00"), 1)
    assert (second.average_rating, second.review_count) == (Decimal("1.50"), 2)
