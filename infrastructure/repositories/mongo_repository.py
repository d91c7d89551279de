"""MongoDB-backed repositories."""
from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from pymongo import DESCENDING
from pymongo.errors import ConnectionFailure, ExecutionTimeout

from core.logging.logger import get_logger, timed
from domain.entities import Match, MatchPage, PlayerMatchRow, Summoner, format_timestamp
from domain.exceptions import RepositoryUnavailableError
from domain.interfaces import IMatchRepository, ISummonerRepository, MAX_PAGE_SIZE, clamp_paging
from infrastructure.database import MongoConnection
from .document_mapper import parse_match_data, parse_summoner_data

logger = get_logger(__name__, service="repository")

T = TypeVar("T")

MATCHES = "matches"
SUMMONERS = "summoners"


async def _gather_or_cancel(*aws: Awaitable[Any]) -> List[Any]:
    """``asyncio.gather`` that cancels and reaps the other reads when one fails."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class _MongoRepository:
    """Shared plumbing: resolve the database, bound every read, translate outages."""

    def __init__(self, connection: MongoConnection, *, query_timeout_ms: int = 5000) -> None:
        self.connection = connection
        self.query_timeout_ms = query_timeout_ms

    async def _collection(self, name: str) -> Any:
        db = await self.connection.get_database()
        return db[name]

    async def _run(self, op: str, fn: Callable[[], Awaitable[T]]) -> T:
        try:
            return await asyncio.wait_for(fn(), timeout=self.query_timeout_ms / 1000.0)
        except (ConnectionFailure, ExecutionTimeout, asyncio.TimeoutError) as e:
            logger.error(lambda: f"mongo-read-failed {op} {type(e).__name__}")
            raise RepositoryUnavailableError(f"MongoDB read '{op}' failed: {e}") from e


class MongoMatchRepository(_MongoRepository, IMatchRepository):
    """Repository for the ``matches`` collection."""

    def __init__(
        self,
        connection: MongoConnection,
        *,
        query_timeout_ms: int = 5000,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        super().__init__(connection, query_timeout_ms=query_timeout_ms)
        self.max_page_size = max_page_size

    async def recent_matches(self, limit: int) -> List[Match]:
        async def _query() -> List[Match]:
            col = await self._collection(MATCHES)
            docs = await (
                col.find({}, max_time_ms=self.query_timeout_ms)
                .sort("timestamp", DESCENDING)
                .limit(max(1, limit))
                .to_list(None)
            )
            return [parse_match_data(d) for d in docs]

        if limit <= 0:
            return []
        return await self._run("recent_matches", _query)

    async def match_by_id(self, match_id: str) -> Optional[Match]:
        async def _query() -> Optional[Match]:
            col = await self._collection(MATCHES)
            doc = await col.find_one({"match_id": match_id}, max_time_ms=self.query_timeout_ms)
            return parse_match_data(doc) if doc else None

        return await self._run("match_by_id", _query)

    async def matches_by_player(self, puuid: str) -> List[Match]:
        async def _query() -> List[Match]:
            col = await self._collection(MATCHES)
            docs = await (
                col.find({"players.puuid": puuid}, max_time_ms=self.query_timeout_ms)
                .sort("timestamp", DESCENDING)
                .to_list(None)
            )
            return [parse_match_data(d) for d in docs]

        return await self._run("matches_by_player", _query)

    async def recent_matches_paginated(
        self,
        page_size: int,
        page_number: int,
        tracked_since: datetime,
    ) -> MatchPage:
        page_size, page_number = clamp_paging(page_size, page_number, self.max_page_size)
        tracked_filter = {
            "timestamp": {"$gte": format_timestamp(tracked_since)},
            "players.mvp_score": {"$gt": 0},
        }

        async def _query() -> MatchPage:
            col = await self._collection(MATCHES)
            cursor = (
                col.find({}, max_time_ms=self.query_timeout_ms)
                .sort("timestamp", DESCENDING)
                .skip((page_number - 1) * page_size)
                .limit(page_size)
            )
            docs, total, tracked = await _gather_or_cancel(
                cursor.to_list(None),
                col.count_documents({}, maxTimeMS=self.query_timeout_ms),
                col.count_documents(tracked_filter, maxTimeMS=self.query_timeout_ms),
            )
            return MatchPage(
                items=[parse_match_data(d) for d in docs],
                total_count=total,
                tracked_last_week=tracked,
                page=page_number,
                page_size=page_size,
            )

        return await self._run("recent_matches_paginated", _query)

    @staticmethod
    def player_rows_pipeline(puuid: str, since: datetime) -> List[Dict[str, Any]]:
        """filter -> unwind -> re-filter; grouping happens in the services."""
        return [
            {"$match": {"timestamp": {"$gte": format_timestamp(since)}, "players.puuid": puuid}},
            {"$unwind": "$players"},
            {"$match": {"players.puuid": puuid}},
            {"$sort": {"timestamp": DESCENDING}},
        ]

    @timed
    async def player_rows(self, puuid: str, since: datetime) -> List[PlayerMatchRow]:
        docs = await self.run_aggregation(self.player_rows_pipeline(puuid, since))
        rows: List[PlayerMatchRow] = []
        for doc in docs:
            row = PlayerMatchRow.for_player(parse_match_data(doc), puuid)
            if row is not None:
                rows.append(row)
        return rows

    async def run_aggregation(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Run a raw aggregation pipeline over ``matches`` and return the documents."""
        async def _query() -> List[Dict[str, Any]]:
            col = await self._collection(MATCHES)
            cursor = await col.aggregate(pipeline, maxTimeMS=self.query_timeout_ms)
            return await cursor.to_list(None)

        return await self._run("aggregate", _query)

    async def ping(self) -> bool:
        async def _query() -> bool:
            db = await self.connection.get_database()
            await db.command("ping")
            return True

        return await self._run("ping", _query)


class MongoSummonerRepository(_MongoRepository, ISummonerRepository):
    """Repository for the ``summoners`` collection."""

    async def summoner_by_puuid(self, puuid: str) -> Optional[Summoner]:
        async def _query() -> Optional[Summoner]:
            col = await self._collection(SUMMONERS)
            doc = await col.find_one({"puuid": puuid}, max_time_ms=self.query_timeout_ms)
            return parse_summoner_data(doc) if doc else None

        return await self._run("summoner_by_puuid", _query)

    async def all_summoners(self) -> List[Summoner]:
        async def _query() -> List[Summoner]:
            col = await self._collection(SUMMONERS)
            docs = await col.find({}, max_time_ms=self.query_timeout_ms).to_list(None)
            return [parse_summoner_data(d) for d in docs]

        return await self._run("all_summoners", _query)
