import asyncio

import pytest

from application.services import MatchListService
from domain.exceptions import NotFoundError
from tests.conftest import days_ago, match_doc, player_doc, summoner_doc


def _listing(make_repos, count=25, **kwargs):
    history = [
        match_doc(
            f"m{i:02d}",
            [player_doc("me", name="OldName#EUW", mvp_score=5.0 if i % 2 == 0 else 0.0)],
            timestamp=days_ago(i * 0.5),
        )
        for i in range(count)
    ]
    return make_repos(history, [summoner_doc("me", "NewName#EUW")], **kwargs)


def test_pages_are_sized_and_counted(make_repos, clock):
    matches, summoners = _listing(make_repos)
    service = MatchListService(matches, summoners, clock=clock)

    first = asyncio.run(service.recent_matches_page(10, 1))
    third = asyncio.run(service.recent_matches_page(10, 3))
    beyond = asyncio.run(service.recent_matches_page(10, 5))

    assert [m.match_id for m in first.items][:2] == ["m00", "m01"]
    assert len(first.items) == 10
    assert len(third.items) == 5
    assert beyond.items == []
    assert first.pagination_dict() == {
        "page": 1,
        "limit": 10,
        "total": 25,
        "totalPages": 3,
        "trackedLastWeek": 8,
    }


def test_paging_arguments_are_clamped(make_repos, clock):
    matches, summoners = _listing(make_repos, max_page_size=20)
    service = MatchListService(matches, summoners, clock=clock)

    huge = asyncio.run(service.recent_matches_page(1000, 0))
    tiny = asyncio.run(service.recent_matches_page(0, -3))

    assert huge.page == 1
    assert huge.page_size == 20
    assert len(huge.items) == 20
    assert tiny.page_size == 1
    assert len(tiny.items) == 1


def test_empty_store_still_reports_one_page(make_repos, clock):
    matches, summoners = make_repos()
    page = asyncio.run(MatchListService(matches, summoners, clock=clock).recent_matches_page())
    assert page.pagination_dict()["totalPages"] == 1
    assert page.items == []


def test_live_roster_names_replace_stored_names(make_repos, clock):
    matches, summoners = _listing(make_repos, count=3)
    service = MatchListService(matches, summoners, clock=clock)

    page = asyncio.run(service.recent_matches_page(10, 1))
    raw = asyncio.run(service.recent_matches(10, with_summoners=False))

    assert {m.players[0].summoner_name for m in page.items} == {"NewName#EUW"}
    assert {m.players[0].summoner_name for m in raw} == {"OldName#EUW"}


def test_match_by_id_and_player(make_repos, clock):
    matches, summoners = _listing(make_repos, count=3)
    service = MatchListService(matches, summoners, clock=clock)

    assert asyncio.run(service.match("m01")).match_id == "m01"
    assert [m.match_id for m in asyncio.run(service.matches_for_player("me"))] == ["m00", "m01", "m02"]
    assert asyncio.run(service.matches_for_player("nobody")) == []
    with pytest.raises(NotFoundError, match="Match not found"):
        asyncio.run(service.match("missing"))
