from datetime import date, datetime, timedelta, timezone

import pytest

from blogcore.apps.blog.repositories import PostRepository
from blogcore.core.utils.utils import utc_now

JAN_1 = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
JAN_15 = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
FEB_1 = datetime(2024, 2, 1, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def repository(session):
    return PostRepository(session)


@pytest.fixture
def timeline(make_post):
    return {
        "jan1": make_post("January first", published_at=JAN_1, fr="Premier janvier"),
        "jan15": make_post("Mid January", published_at=JAN_15, fr="Mi-janvier"),
        "feb1": make_post("February", published_at=FEB_1),
    }


def test_next_and_previous(repository, timeline):
    jan1, jan15, feb1 = (timeline[k].record for k in ("jan1", "jan15", "feb1"))

    assert repository.next(jan1, "en").id == jan15.id
    assert repository.previous(feb1, "en").id == jan15.id
    assert repository.next(feb1, "en") is None
    assert repository.previous(jan1, "en") is None


def test_navigation_skips_drafts(repository, make_post, timeline):
    make_post("Draft in between", published_at=datetime(2024, 1, 10), draft=True)

    assert repository.next(timeline["jan1"].record, "en").id == timeline["jan15"].id
    assert repository.previous(timeline["jan15"].record, "en").id == timeline["jan1"].id


def test_navigation_is_locale_joined(repository, timeline):
    # February has no French translation.
    assert repository.next(timeline["jan15"].record, "fr") is None
    assert repository.previous(timeline["feb1"].record, "fr").id == timeline["jan15"].id


def test_previous_only_filters_drafts(repository, make_post):
    soon = make_post("Soon", published_at=utc_now() + timedelta(days=5))
    later = make_post("Later", published_at=utc_now() + timedelta(days=10))

    assert repository.previous(later.record, "en").id == soon.id
    assert repository.next(soon.record, "en").id == later.id
    assert repository.recent(5, "en") == []


def test_by_month_newest_first(repository, timeline, make_post):
    draft = make_post("Draft in January", published_at=datetime(2024, 1, 20), draft=True)
    posts = repository.by_month(date(2024, 1, 31))

    assert [p.id for p in posts] == [draft.id, timeline["jan15"].id, timeline["jan1"].id]


def test_by_month_locale_filter_only_when_requested(repository, timeline, make_post):
    english_only = make_post("English only", published_at=datetime(2024, 1, 31, 23, 59))

    everything = repository.by_month(date(2024, 1, 5))
    french = repository.by_month(date(2024, 1, 5), "fr")

    assert english_only.id in [p.id for p in everything]
    assert english_only.id not in [p.id for p in french]
    assert [p.id for p in french] == [timeline["jan15"].id, timeline["jan1"].id]


def test_by_year_bounds(repository, timeline, make_post):
    make_post("New year's eve", published_at=datetime(2023, 12, 31, 23, 59, 59))
    make_post("Next year", published_at=datetime(2025, 1, 1, 0, 0, 0))

    posts = repository.by_year(date(2024, 7, 1), "en")
    assert [p.id for p in posts] == [
        timeline["feb1"].id,
        timeline["jan15"].id,
        timeline["jan1"].id,
    ]


def test_ties_keep_storage_order(repository, make_post):
    first = make_post("Tie one", published_at=JAN_1)
    second = make_post("Tie two", published_at=JAN_1)

    assert [p.id for p in repository.by_month(JAN_1)] == [first.id, second.id]


def test_recent_returns_live_posts_only(repository, timeline, make_post, future):
    make_post("Draft", published_at=datetime(2024, 3, 1), draft=True)
    make_post("Scheduled", published_at=future)

    recent = repository.recent(2, "en")
    assert [p.id for p in recent] == [timeline["feb1"].id, timeline["jan15"].id]


def test_popular_orders_by_access_count(repository, post_service, timeline):
    for _ in range(3):
        post_service.register_view(timeline["jan15"].id)
    post_service.register_view(timeline["feb1"].id)

    popular = repository.popular(2, "en")
    assert [p.id for p in popular] == [timeline["jan15"].id, timeline["feb1"].id]
    assert [p.id for p in repository.popular(5, "fr")] == [
        timeline["jan15"].id,
        timeline["jan1"].id,
    ]


def test_published_dates_older_than(repository, timeline, make_post):
    make_post("Old draft", published_at=datetime(2023, 6, 1), draft=True)

    dates = repository.published_dates_older_than(FEB_1, "en")
    assert dates == [JAN_15, JAN_1]


def test_live_page_paginates(repository, timeline):
    page = repository.live_page("en", page=1, per_page=2)

    assert page.total == 3
    assert page.pages == 2
    assert [p.id for p in page.data] == [timeline["feb1"].id, timeline["jan15"].id]
    assert [p.id for p in repository.live_page("en", page=2, per_page=2).data] == [
        timeline["jan1"].id
    ]
