"""
Tests for primary/additional experience selection.
"""

import pytest
from fastresume.core.schemas import CoverageItem, Evidence, SelectionOptions, WorkEntry
from fastresume.core.selector import select_experiences


def _entries():
    return [
        WorkEntry(role="Barista", company="Cafe Uno", period="2019 - 2020",
                  bullets=["Made coffee", "Cleaned machines"]),
        WorkEntry(role="Cashier", company="Market Hub", period="2021 - Present",
                  bullets=["Handled cash", "Balanced tills", "Served customers", "Stocked shelves"]),
        WorkEntry(role="Volunteer", company="Food Bank", period="2022 - 2023",
                  bullets=["Packed boxes"], is_volunteer=True),
    ]


def _evidence(work_index, bullet, score):
    return CoverageItem(
        key="inventory",
        label_en="Inventory",
        label_zh="库存管理",
        covered=True,
        evidence=Evidence(work_index=work_index, bullet=bullet, score=score),
    )


def test_no_signal_keeps_non_volunteer_entries():
    result = select_experiences(_entries(), [], "")
    # Presented most recent first
    assert [e.role for e in result.primary] == ["Cashier", "Barista"]
    assert result.additional == []


def test_additional_bullets_capped():
    opts = SelectionOptions(min_primary=1, add_count=1, bullet_cap=2)
    result = select_experiences(_entries(), [], "", opts)
    assert [e.role for e in result.primary] == ["Barista"]
    assert [e.role for e in result.additional] == ["Cashier"]
    assert result.additional[0].bullets == ["Handled cash", "Balanced tills"]


def test_evidence_ranks_and_leads():
    coverage = [_evidence(2, "Packed boxes", 0.7)]
    result = select_experiences(_entries(), coverage, "Pack boxes and sort donations")
    assert [e.role for e in result.primary] == ["Volunteer", "Barista"]
    assert result.primary[0].bullets[0] == "Packed boxes"
    assert [e.role for e in result.additional] == ["Cashier"]


def test_best_bullet_moved_to_front():
    coverage = [_evidence(1, "Stocked shelves", 0.7)]
    result = select_experiences(_entries(), coverage, "Restock shelves")
    cashier = next(e for e in result.primary if e.role == "Cashier")
    assert cashier.bullets[0] == "Stocked shelves"
    assert len(cashier.bullets) == 4


def test_jd_overlap_used_without_evidence():
    result = select_experiences(_entries(), [], "Handled cash and balanced tills", SelectionOptions(min_primary=1))
    assert [e.role for e in result.primary] == ["Cashier"]
    assert result.primary[0].bullets[0] in ("Handled cash", "Balanced tills")


@pytest.mark.parametrize("min_primary,add_count", [(0, 0), (1, 0), (2, 1), (5, 5)])
def test_length_bounds(min_primary, add_count):
    opts = SelectionOptions(min_primary=min_primary, add_count=add_count)
    result = select_experiences(_entries(), [_evidence(0, "Made coffee", 0.5)], "coffee", opts)
    assert len(result.primary) <= min_primary
    assert len(result.additional) <= add_count


def test_inputs_not_mutated_and_deterministic():
    entries = _entries()
    snapshot = [e.model_dump() for e in entries]
    coverage = [_evidence(1, "Stocked shelves", 0.7)]

    first = select_experiences(entries, coverage, "Restock shelves")
    first.primary[0].bullets.append("changed")
    second = select_experiences(entries, coverage, "Restock shelves")

    assert [e.model_dump() for e in entries] == snapshot
    assert "changed" not in second.primary[0].bullets
    assert second.primary[0].model_dump()["role"] == first.primary[0].role


def test_empty_entries():
    result = select_experiences([], [], "anything")
    assert result.primary == []
    assert result.additional == []
