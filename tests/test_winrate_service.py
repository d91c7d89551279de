import asyncio

import pytest

from application.services import TTLCache, WinrateService
from domain.exceptions import InvalidArgumentError
from tests.conftest import days_ago, match_doc, player_doc


def _history():
    return [
        match_doc("m1", [player_doc("me", champion="Ahri", position="MIDDLE")], timestamp=days_ago(1), winner=100),
        match_doc("m2", [player_doc("me", champion="Ahri", position="TOP")], timestamp=days_ago(2), winner=200),
        match_doc("m3", [player_doc("me", champion="Zed", position="MIDDLE")], timestamp=days_ago(3), winner=100),
        # outside the 15 day window
        match_doc("old", [player_doc("me", champion="Ahri", position="MIDDLE")], timestamp=days_ago(20), winner=100),
    ]


def test_winrate_over_window(make_repos, clock):
    matches, _ = make_repos(_history())
    service = WinrateService(matches, clock=clock)

    stats = asyncio.run(service.winrate("me", "Ahri", "MIDDLE"))

    assert stats.total_games == 3
    assert stats.overall_winrate == 66.7
    assert stats.champion_games == 2
    assert stats.champion_winrate == 50.0
    assert stats.position_games == 2
    assert stats.position_winrate == 100.0
    assert stats.to_dict() == {
        "overallWinrate": 66.7,
        "championWinrate": 50.0,
        "positionWinrate": 100.0,
        "totalGames": 3,
        "championGames": 2,
        "positionGames": 2,
    }


def test_unknown_player_gets_zeroes(make_repos, clock):
    matches, _ = make_repos(_history())
    stats = asyncio.run(WinrateService(matches, clock=clock).winrate("nobody", "Ahri", "MIDDLE"))
    assert stats.total_games == 0
    assert stats.overall_winrate == 0.0


def test_position_is_matched_exactly(make_repos, clock):
    matches, _ = make_repos(_history())
    stats = asyncio.run(WinrateService(matches, clock=clock).winrate("me", "Ahri", "middle"))
    assert stats.position_games == 0


def test_match_without_a_winner_counts_as_game_not_win(make_repos, clock):
    matches, _ = make_repos([
        match_doc("m1", [player_doc("me")], winner=None),
        match_doc("m2", [player_doc("me")], winner=100),
    ])
    stats = asyncio.run(WinrateService(matches, clock=clock).winrate("me", "Ahri", "MIDDLE"))
    assert stats.total_games == 2
    assert stats.overall_winrate == 50.0


@pytest.mark.parametrize(
    "puuid, champion, position, message",
    [
        ("", "Ahri", "MIDDLE", "Missing required parameters: puuid, champion"),
        ("me", "  ", "MIDDLE", "Missing required parameters: puuid, champion"),
        ("me", "Ahri", "", "Position required for winrate statistics"),
    ],
)
def test_missing_parameters_are_rejected(make_repos, clock, puuid, champion, position, message):
    matches, _ = make_repos()
    with pytest.raises(InvalidArgumentError) as exc:
        asyncio.run(WinrateService(matches, clock=clock).winrate(puuid, champion, position))
    assert str(exc.value) == message


class CountingRepo:
    def __init__(self, inner):
        self.inner = inner
        self.calls = 0

    async def player_rows(self, puuid, since):
        self.calls += 1
        return await self.inner.player_rows(puuid, since)


def test_repeat_queries_hit_the_cache(make_repos, clock):
    matches, _ = make_repos(_history())
    repo = CountingRepo(matches)
    service = WinrateService(repo, clock=clock, cache=TTLCache(ttl_s=60))

    async def run():
        first = await service.winrate("me", "Ahri", "MIDDLE")
        second = await service.winrate("me", "Ahri", "MIDDLE")
        other = await service.winrate("me", "Zed", "MIDDLE")
        return first, second, other

    first, second, other = asyncio.run(run())
    assert first == second
    assert other.champion_games == 1
    assert repo.calls == 2
