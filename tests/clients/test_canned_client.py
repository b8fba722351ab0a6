from __future__ import annotations

import pytest

from lead_finder.clients.sample import CannedResponseClient


def test_replies_in_order_then_repeats_last() -> None:
    client = CannedResponseClient(["first", "second"])

    assert [client.generate(f"p{index}") for index in range(3)] == ["first", "second", "second"]
    assert client.prompts == ["p0", "p1", "p2"]


def test_reads_replies_from_files(tmp_path) -> None:
    reply_path = tmp_path / "reply.md"
    reply_path.write_text("| ID | Email | Website |", encoding="utf-8")

    client = CannedResponseClient(["inline"], files=[str(reply_path)])

    assert client.generate("a") == "inline"
    assert client.generate("b") == "| ID | Email | Website |"


def test_requires_at_least_one_reply() -> None:
    with pytest.raises(ValueError):
        CannedResponseClient()
