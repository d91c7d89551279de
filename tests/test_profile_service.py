import asyncio

import pytest

from application.services import PlayerProfileService
from domain.exceptions import InvalidArgumentError, NotFoundError
from tests.conftest import days_ago, match_doc, player_doc, summoner_doc

CHAMPIONS = ["Ahri", "Zed", "Lux", "Ahri", "Jinx", "Thresh", "Garen", "Ahri", "Zed"]


def _repos(make_repos):
    history = []
    for i, champion in enumerate(CHAMPIONS):
        players = [
            player_doc("me", champion=champion, position="MIDDLE" if i % 2 == 0 else "TOP",
                       kills=4, deaths=i % 3, assists=6, danger_pings=2, on_my_way_pings=1),
            player_doc("mate", champion="Leona", position="UTILITY", kills=1, deaths=3, assists=10),
        ]
        if i < 3:
            # an enemy roster member on the other team
            players.append(player_doc("rival", team_id=200, mvp_score=3.0))
        history.append(match_doc(f"m{i}", players, timestamp=days_ago(i + 1), winner=100 if i % 3 else 200))
    # undecided game
    history.append(match_doc("draw", [player_doc("me", kills=4), player_doc("mate")], timestamp=days_ago(40), winner=None))
    roster = [summoner_doc("me", "Me#EUW", "Maria"), summoner_doc("mate", "Mate#EUW"), summoner_doc("rival", "Rival#EUW")]
    return make_repos(history, roster)


def test_profile_totals_and_averages(make_repos):
    matches, summoners = _repos(make_repos)
    profile = asyncio.run(PlayerProfileService(matches, summoners).profile("me"))

    assert profile.summoner_name == "Me#EUW"
    assert profile.real_name == "Maria"
    assert profile.total_matches == 10
    # winner is 200 for i in 0,3,6 and nobody for the draw
    assert profile.wins == 6
    assert profile.losses == 3
    assert profile.wins + profile.losses <= profile.total_matches
    assert profile.win_rate == 60.0
    assert profile.average_kills == 4.0
    assert profile.average_danger_pings == 1.8
    assert profile.average_pings == 2.7


def test_champions_are_capped_and_ordered_by_games(make_repos):
    matches, summoners = _repos(make_repos)
    profile = asyncio.run(PlayerProfileService(matches, summoners).profile("me"))

    names = [c.champion for c in profile.most_played_champions]
    assert len(names) == 5
    assert names == ["Ahri", "Zed", "Lux", "Jinx", "Thresh"]
    ahri = profile.most_played_champions[0]
    assert ahri.games == 4
    assert ahri.win_rate == 25.0


def test_positions_cover_every_game(make_repos):
    matches, summoners = _repos(make_repos)
    profile = asyncio.run(PlayerProfileService(matches, summoners).profile("me"))
    assert sum(p.games for p in profile.most_played_positions) == profile.total_matches
    assert profile.most_played_positions[0].position == "MIDDLE"


def test_teammates_count_shared_games(make_repos):
    matches, summoners = _repos(make_repos)
    profile = asyncio.run(PlayerProfileService(matches, summoners).profile("me"))

    by_puuid = {t.puuid: t for t in profile.teammates_stats}
    mate = by_puuid["mate"]
    assert mate.summoner_name == "Mate#EUW"
    assert mate.games_played == 10
    assert mate.wins == 6
    assert mate.losses == 3
    assert mate.games_played >= mate.wins + mate.losses

    rival = by_puuid["rival"]
    assert rival.games_played == 3
    assert rival.wins == rival.losses == 0
    assert [t.puuid for t in profile.teammates_stats] == ["mate", "rival"]


def test_recent_matches_are_newest_five(make_repos):
    matches, summoners = _repos(make_repos)
    profile = asyncio.run(PlayerProfileService(matches, summoners).profile("me"))
    assert [m.match_id for m in profile.recent_matches] == ["m0", "m1", "m2", "m3", "m4"]
    assert profile.to_dict()["recent_matches"][0]["match_id"] == "m0"


def test_name_falls_back_to_latest_row_outside_roster(make_repos):
    matches, summoners = make_repos([match_doc("m1", [player_doc("ghost", name="Ghost#NA")])])
    profile = asyncio.run(PlayerProfileService(matches, summoners).profile("ghost"))
    assert profile.summoner_name == "Ghost#NA"
    assert profile.teammates_stats == []


def test_unknown_player_is_not_found(make_repos):
    matches, summoners = _repos(make_repos)
    with pytest.raises(NotFoundError, match="Player not found"):
        asyncio.run(PlayerProfileService(matches, summoners).profile("nobody"))


def test_blank_puuid_is_rejected(make_repos):
    matches, summoners = _repos(make_repos)
    with pytest.raises(InvalidArgumentError):
        asyncio.run(PlayerProfileService(matches, summoners).profile(" "))
