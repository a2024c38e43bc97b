"""Tests for app.repositories.base: Neo4j base repository."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from app.repositories.base import GRAPH_SCHEMA_STATEMENTS, Neo4jRepository, ensure_graph_schema


class TestExecuteRead:
    async def test_calls_session_run(
        self,
        mock_neo4j_driver_with_session,
        mock_neo4j_session,
    ):
        repo = Neo4jRepository(mock_neo4j_driver_with_session)
        await repo.execute_read("MATCH (n:Note) RETURN n", {"id": "note-1"})
        mock_neo4j_session.run.assert_called_once_with(
            "MATCH (n:Note) RETURN n",
            {"id": "note-1"},
        )

    async def test_returns_data(
        self,
        mock_neo4j_driver_with_session,
        mock_neo4j_session,
    ):
        mock_neo4j_session.run.return_value.data = AsyncMock(
            return_value=[{"n": "test"}],
        )
        repo = Neo4jRepository(mock_neo4j_driver_with_session)
        result = await repo.execute_read("MATCH (n) RETURN n")
        assert result == [{"n": "test"}]

    async def test_missing_parameters_sent_as_empty_dict(
        self,
        mock_neo4j_driver_with_session,
        mock_neo4j_session,
    ):
        repo = Neo4jRepository(mock_neo4j_driver_with_session)
        await repo.execute_read("MATCH (n) RETURN n")
        mock_neo4j_session.run.assert_called_once_with("MATCH (n) RETURN n", {})


class TestExecuteWrite:
    async def test_calls_consume(
        self,
        mock_neo4j_driver_with_session,
        mock_neo4j_session,
    ):
        repo = Neo4jRepository(mock_neo4j_driver_with_session)
        await repo.execute_write("CREATE (n:GraphNode)")
        mock_neo4j_session.run.return_value.consume.assert_called_once()

    async def test_retries_transient_error(
        self,
        mock_neo4j_driver_with_session,
        mock_neo4j_session,
    ):
        from neo4j.exceptions import TransientError

        ok = mock_neo4j_session.run.return_value
        mock_neo4j_session.run.side_effect = [TransientError("deadlock"), ok]

        repo = Neo4jRepository(mock_neo4j_driver_with_session)
        await repo.execute_write("MERGE (n:GraphNode {id: 'x'})")

        assert mock_neo4j_session.run.call_count == 2

    async def test_other_errors_not_retried(
        self,
        mock_neo4j_driver_with_session,
        mock_neo4j_session,
    ):
        mock_neo4j_session.run.side_effect = ValueError("bad query")

        repo = Neo4jRepository(mock_neo4j_driver_with_session)
        with pytest.raises(ValueError):
            await repo.execute_write("MERGE (n)")

        assert mock_neo4j_session.run.call_count == 1


class TestExists:
    async def test_rejects_unknown_label(self, mock_neo4j_driver_with_session):
        repo = Neo4jRepository(mock_neo4j_driver_with_session)
        with pytest.raises(ValueError, match="Invalid Neo4j label"):
            await repo.exists("Note) DETACH DELETE (x", "id", "1")

    async def test_rejects_unknown_property(self, mock_neo4j_driver_with_session):
        repo = Neo4jRepository(mock_neo4j_driver_with_session)
        with pytest.raises(ValueError, match="Invalid Neo4j property"):
            await repo.exists("Note", "password", "x")

    async def test_query_uses_validated_names(
        self,
        mock_neo4j_driver_with_session,
        mock_neo4j_session,
    ):
        repo = Neo4jRepository(mock_neo4j_driver_with_session)
        await repo.exists("Note", "user_id", "user-1")

        query, params = mock_neo4j_session.run.call_args.args
        assert query.startswith("MATCH (n:Note {user_id: $value})")
        assert params == {"value": "user-1"}

    async def test_exists_returns_bool(
        self,
        mock_neo4j_driver_with_session,
        mock_neo4j_session,
    ):
        mock_neo4j_session.run.return_value.data = AsyncMock(
            return_value=[{"exists": True}],
        )
        repo = Neo4jRepository(mock_neo4j_driver_with_session)
        result = await repo.exists("Note", "user_id", "user-1")
        assert result is True

    async def test_no_rows_is_false(self, mock_neo4j_driver_with_session):
        repo = Neo4jRepository(mock_neo4j_driver_with_session)
        assert await repo.exists("GraphNode", "id", "missing") is False


class TestEnsureGraphSchema:
    async def test_runs_every_statement(
        self,
        mock_neo4j_driver_with_session,
        mock_neo4j_session,
    ):
        await ensure_graph_schema(mock_neo4j_driver_with_session)

        run_queries = [c.args[0] for c in mock_neo4j_session.run.call_args_list]
        assert run_queries == list(GRAPH_SCHEMA_STATEMENTS)

    def test_identity_constraint_present(self):
        assert any(
            "(n.user_id, n.node_type, n.reference_id) IS UNIQUE" in s
            for s in GRAPH_SCHEMA_STATEMENTS
        )
