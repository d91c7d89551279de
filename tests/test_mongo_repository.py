import asyncio
from datetime import datetime, timezone

import pytest
from pymongo.errors import AutoReconnect, ServerSelectionTimeoutError

from domain.exceptions import RepositoryUnavailableError
from infrastructure.database import MongoConnection
from infrastructure.repositories import InMemorySummonerRepository, MongoMatchRepository, MongoSummonerRepository
from tests.conftest import match_doc, player_doc, summoner_doc


def _values(doc, path):
    """Every value at a dotted path, descending into arrays the way MongoDB does."""
    values = [doc]
    for part in path.split("."):
        nxt = []
        for v in values:
            if isinstance(v, list):
                nxt.extend(x.get(part) for x in v if isinstance(x, dict) and part in x)
            elif isinstance(v, dict) and part in v:
                nxt.append(v[part])
        values = nxt
    return values


def _matches(doc, query):
    for path, cond in query.items():
        values = _values(doc, path)
        if isinstance(cond, dict):
            ok = all(
                any(v is not None and (v >= arg if op == "$gte" else v > arg) for v in values)
                for op, arg in cond.items()
            )
        else:
            ok = cond in values
        if not ok:
            return False
    return True


class FakeCursor:
    def __init__(self, docs):
        self.docs = list(docs)

    def sort(self, key, direction):
        self.docs.sort(key=lambda d: d.get(key) or "", reverse=direction == -1)
        return self

    def skip(self, n):
        self.docs = self.docs[n:]
        return self

    def limit(self, n):
        self.docs = self.docs[:n]
        return self

    async def to_list(self, length=None):
        return list(self.docs)


class FakeCollection:
    def __init__(self, docs=()):
        self.docs = list(docs)
        self.calls = []

    def find(self, query=None, **kwargs):
        self.calls.append(("find", query, kwargs))
        return FakeCursor(d for d in self.docs if _matches(d, query or {}))

    async def find_one(self, query, **kwargs):
        self.calls.append(("find_one", query, kwargs))
        return next((d for d in self.docs if _matches(d, query)), None)

    async def count_documents(self, query, **kwargs):
        self.calls.append(("count_documents", query, kwargs))
        return sum(1 for d in self.docs if _matches(d, query))

    async def aggregate(self, pipeline, **kwargs):
        self.calls.append(("aggregate", pipeline, kwargs))
        return FakeCursor(self.docs)

    @property
    def pipelines(self):
        return [args for name, args, _ in self.calls if name == "aggregate"]


class FakeAdmin:
    def __init__(self, client):
        self.client = client

    async def command(self, name):
        self.client.pings += 1
        await asyncio.sleep(0)
        if self.client.fail:
            raise ServerSelectionTimeoutError("no servers")
        return {"ok": 1}


class FakeDatabase(dict):
    async def command(self, name):
        return {"ok": 1}


class FakeClient:
    def __init__(self, collections=None, fail=False):
        self.fail = fail
        self.pings = 0
        self.closed = False
        self.admin = FakeAdmin(self)
        self.db = FakeDatabase(collections or {})

    def __getitem__(self, name):
        return self.db

    async def close(self):
        self.closed = True


class Factory:
    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.clients = []

    def __call__(self):
        client = FakeClient(**self.kwargs)
        self.clients.append(client)
        return client


def test_concurrent_callers_share_one_connection():
    factory = Factory()
    connection = MongoConnection("mongodb://fake", "db", client_factory=factory)

    async def run():
        return await asyncio.gather(*(connection.get_database() for _ in range(5)))

    databases = asyncio.run(run())
    assert len(factory.clients) == 1
    assert all(db is databases[0] for db in databases)
    assert connection.is_connected


def test_failed_connect_is_unavailable_and_retried():
    factory = Factory(fail=True)
    connection = MongoConnection("mongodb://fake", "db", client_factory=factory)

    async def run():
        for _ in range(2):
            with pytest.raises(RepositoryUnavailableError):
                await connection.get_database()

    asyncio.run(run())
    assert len(factory.clients) == 2
    assert all(c.closed for c in factory.clients)
    assert not connection.is_connected


def test_close_releases_the_client():
    factory = Factory()
    connection = MongoConnection("mongodb://fake", "db", client_factory=factory)

    async def run():
        await connection.get_database()
        await connection.close()

    asyncio.run(run())
    assert factory.clients[0].closed
    assert not connection.is_connected


def test_player_rows_unwinds_through_the_pipeline():
    since = datetime(2025, 2, 14, tzinfo=timezone.utc)
    doc = match_doc("m1", [], timestamp="2025-02-20T10:00:00.000Z", winner=100)
    doc["_id"] = "object-id"
    doc["players"] = player_doc("me", teamId=100)
    del doc["players"]["team_id"]
    matches = FakeCollection([doc])
    connection = MongoConnection("mongodb://fake", "db", client_factory=Factory(collections={"matches": matches}))

    rows = asyncio.run(MongoMatchRepository(connection).player_rows("me", since))

    assert len(rows) == 1
    assert rows[0].won is True
    assert rows[0].player.team_id == 100
    pipeline = matches.pipelines[0]
    assert pipeline[0] == {"$match": {"timestamp": {"$gte": "2025-02-14T00:00:00.000Z"}, "players.puuid": "me"}}
    assert pipeline[1] == {"$unwind": "$players"}
    assert pipeline[2] == {"$match": {"players.puuid": "me"}}


def test_pagination_and_lookups_map_documents():
    docs = [match_doc(f"m{i}", [player_doc("me")]) for i in range(3)]
    summoners = FakeCollection([{"_id": 1, "puuid": "me", "display_name": "Me#EUW"}])
    factory = Factory(collections={"matches": FakeCollection(docs), "summoners": summoners})
    connection = MongoConnection("mongodb://fake", "db", client_factory=factory)
    repo = MongoMatchRepository(connection)

    async def run():
        page = await repo.recent_matches_paginated(2, 2, datetime(2025, 1, 1, tzinfo=timezone.utc))
        found = await repo.match_by_id("m1")
        missing = await repo.match_by_id("nope")
        roster = await MongoSummonerRepository(connection).all_summoners()
        return page, found, missing, roster

    page, found, missing, roster = asyncio.run(run())
    assert [m.match_id for m in page.items] == ["m2"]
    assert page.total_count == 3
    assert found.match_id == "m1"
    assert missing is None
    assert roster[0].display_name == "Me#EUW"
    assert len(factory.clients) == 1


def test_slow_read_is_reported_unavailable():
    class SlowCollection(FakeCollection):
        async def find_one(self, query, **kwargs):
            await asyncio.sleep(1)

    factory = Factory(collections={"matches": SlowCollection()})
    connection = MongoConnection("mongodb://fake", "db", client_factory=factory)
    repo = MongoMatchRepository(connection, query_timeout_ms=10)

    with pytest.raises(RepositoryUnavailableError):
        asyncio.run(repo.match_by_id("m1"))


def _repo(collections, **kwargs):
    connection = MongoConnection("mongodb://fake", "db", client_factory=Factory(collections=collections))
    return connection, MongoMatchRepository(connection, **kwargs)


def test_tracked_count_skips_untracked_and_old_matches():
    docs = [
        match_doc("recent", [player_doc("me")], timestamp="2025-02-28T10:00:00.000Z"),
        match_doc("untracked", [player_doc("x", mvp_score=0)], timestamp="2025-02-27T10:00:00.000Z"),
        match_doc("old", [player_doc("me")], timestamp="2025-02-10T10:00:00.000Z"),
        match_doc("mixed", [player_doc("x", mvp_score=0), player_doc("me")], timestamp="2025-02-25T10:00:00.000Z"),
    ]
    matches = FakeCollection(docs)
    _, repo = _repo({"matches": matches}, query_timeout_ms=1234)

    page = asyncio.run(repo.recent_matches_paginated(10, 1, datetime(2025, 2, 22, 12, tzinfo=timezone.utc)))

    assert page.total_count == 4
    assert page.tracked_last_week == 2
    assert [m.match_id for m in page.items] == ["recent", "untracked", "mixed", "old"]
    counts = [args for name, args, _ in matches.calls if name == "count_documents"]
    assert {"timestamp": {"$gte": "2025-02-22T12:00:00.000Z"}, "players.mvp_score": {"$gt": 0}} in counts


def test_reads_carry_a_server_side_time_limit():
    matches = FakeCollection([match_doc("m1", [player_doc("me")])])
    _, repo = _repo({"matches": matches}, query_timeout_ms=1234)

    async def run():
        await repo.recent_matches(5)
        await repo.match_by_id("m1")
        await repo.matches_by_player("me")
        await repo.recent_matches_paginated(10, 1, datetime(2025, 1, 1, tzinfo=timezone.utc))
        await repo.player_rows("me", datetime(2025, 1, 1, tzinfo=timezone.utc))

    asyncio.run(run())
    for name, _, kwargs in matches.calls:
        assert kwargs.get("max_time_ms", kwargs.get("maxTimeMS")) == 1234, name


def test_matches_by_player_filters_on_embedded_puuid():
    docs = [
        match_doc("both", [player_doc("me"), player_doc("mate")]),
        match_doc("other", [player_doc("mate")]),
    ]
    matches = FakeCollection(docs)
    _, repo = _repo({"matches": matches})

    found = asyncio.run(repo.matches_by_player("me"))

    assert [m.match_id for m in found] == ["both"]
    assert matches.calls[0][1] == {"players.puuid": "me"}


def test_summoner_by_puuid_on_both_backends():
    roster = [summoner_doc("me", "Me#EUW", "Maria"), {"puuid": "old", "summoner_name": "Old#EUW"}]
    connection = MongoConnection(
        "mongodb://fake", "db", client_factory=Factory(collections={"summoners": FakeCollection(roster)})
    )
    mongo = MongoSummonerRepository(connection)
    memory = InMemorySummonerRepository(roster)

    async def lookups(repo):
        return [await repo.summoner_by_puuid(p) for p in ("me", "old", "nobody")]

    for repo in (mongo, memory):
        me, old, nobody = asyncio.run(lookups(repo))
        assert (me.display_name, me.real_name) == ("Me#EUW", "Maria")
        assert old.display_name == "Old#EUW"
        assert nobody is None


def test_failed_count_cancels_the_page_read():
    class FlakyCollection(FakeCollection):
        cancelled = False

        def find(self, query=None, **kwargs):
            owner = self

            class SlowCursor(FakeCursor):
                async def to_list(self, length=None):
                    try:
                        await asyncio.sleep(10)
                    except asyncio.CancelledError:
                        owner.cancelled = True
                        raise

            return SlowCursor([])

        async def count_documents(self, query, **kwargs):
            raise AutoReconnect("primary stepped down")

    matches = FlakyCollection()
    _, repo = _repo({"matches": matches})

    with pytest.raises(RepositoryUnavailableError):
        asyncio.run(repo.recent_matches_paginated(10, 1, datetime(2025, 1, 1, tzinfo=timezone.utc)))
    assert matches.cancelled
