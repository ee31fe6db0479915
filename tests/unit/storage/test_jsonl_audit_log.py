"""Unit tests for JsonlAuditLog."""

from datetime import timedelta
from pathlib import Path

import pytest

from roster_consensus.models.consensus import AgentAuditSummary, AuditRecord
from roster_consensus.models.enums import AgentRole, DecisionType, Recommendation
from roster_consensus.storage.exceptions import StorageError
from roster_consensus.storage.jsonl import JsonlAuditLog


@pytest.fixture
def record(as_of) -> AuditRecord:
    """Create an audit record."""
    return AuditRecord(
        decision_type=DecisionType.shift_assignment,
        proposal={"type": "shift_assignment", "user_id": "u1"},
        result={"final_decision": "reject", "consensus_score": 100},
        agent_summaries=[
            AgentAuditSummary(
                role=AgentRole.compliance,
                recommendation=Recommendation.reject,
                score=40,
            )
        ],
        roster_id="r1",
        created_at=as_of,
        retain_until=as_of + timedelta(days=730),
    )


class TestJsonlAuditLog:
    """Tests for the JSON lines audit log."""

    @pytest.mark.asyncio
    async def test_records_appended(self, tmp_path: Path, record) -> None:
        """Test that each write appends one line."""
        log = JsonlAuditLog(tmp_path / "audit" / "log.jsonl")

        await log.write(record)
        await log.write(record.model_copy(update={"id": "second"}))

        lines = log.path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert [r.id for r in log.read_all()] == [record.id, "second"]

    @pytest.mark.asyncio
    async def test_round_trip_preserves_record(self, tmp_path: Path, record) -> None:
        """Test that a read record equals the written one."""
        log = JsonlAuditLog(tmp_path / "log.jsonl")

        await log.write(record)

        assert log.read_all() == [record]

    def test_missing_file_reads_empty(self, tmp_path: Path) -> None:
        """Test that an absent log has no records."""
        assert JsonlAuditLog(tmp_path / "none.jsonl").read_all() == []

    def test_malformed_line_raises(self, tmp_path: Path) -> None:
        """Test that corrupt content is reported as a storage error."""
        path = tmp_path / "log.jsonl"
        path.write_text("{not json}\n", encoding="utf-8")

        with pytest.raises(StorageError, match="Failed to parse audit log"):
            JsonlAuditLog(path).read_all()

    @pytest.mark.asyncio
    async def test_unwritable_path_raises(self, tmp_path: Path, record) -> None:
        """Test that write failures are wrapped."""
        blocker = tmp_path / "file"
        blocker.write_text("")

        with pytest.raises(StorageError, match="Failed to write audit record"):
            await JsonlAuditLog(blocker / "log.jsonl").write(record)
