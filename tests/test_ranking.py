# tests/test_ranking.py
from __future__ import annotations

import json

import pytest

from snippet_expander.expansion.general.fuzzy.scoring import clear_scoring_cache
from snippet_expander.expansion.general.ranking import aggregate as AG
from snippet_expander.expansion.general.types import ScoreResult, ShortcutRecord
from snippet_expander.expansion.general.utils.load_config import temp_data_dir


def _rec(alias: str, text: str = "meow", enabled: bool = True) -> ShortcutRecord:
    return ShortcutRecord(id=f"id-{alias}", alias=alias, expansion_text=text, enabled=enabled)


@pytest.fixture(autouse=True)
def _fresh_scoring_config():
    clear_scoring_cache()
    yield
    clear_scoring_cache()


# ─────────────────────────────────────────────────────────────────────────────
# score_shortcut
# ─────────────────────────────────────────────────────────────────────────────

def test_alias_hits_are_weighted_above_text_hits():
    assert AG.score_shortcut(_rec("sig", "x"), "sig") == pytest.approx(1203 * 1.6)
    assert AG.score_shortcut(_rec("zz", "sig stuff"), "sig") == pytest.approx(1003.0)


def test_typo_in_alias_uses_approximate_score():
    assert AG.score_shortcut(_rec("signature", "x"), "signatrue") == pytest.approx(770 * 1.6)


def test_typo_in_body_text_uses_token_score():
    rec = _rec("zz", "Thanks for reaching out")
    assert AG.score_shortcut(rec, "reachng") == pytest.approx(700.0)


def test_no_match_scores_zero():
    assert AG.score_shortcut(_rec("intro", "hello there"), "qqqq") == 0


# ─────────────────────────────────────────────────────────────────────────────
# rank_and_filter
# ─────────────────────────────────────────────────────────────────────────────

def test_empty_query_returns_everything_in_order():
    records = [_rec("zeta"), _rec("alpha", enabled=False), _rec("mid")]
    assert AG.rank_and_filter(records, "") == records
    assert AG.rank_and_filter(records, "   ") == records


def test_tie_puts_enabled_first():
    cat = _rec("cat", enabled=True)
    cab = _rec("cab", enabled=False)
    assert AG.score_shortcut(cat, "ca") == AG.score_shortcut(cab, "ca")
    assert AG.rank_and_filter([cab, cat], "ca") == [cat, cab]
    assert AG.rank_and_filter([cat, cab], "ca") == [cat, cab]


def test_tie_between_enabled_records_sorts_by_alias_case_insensitively():
    zeta = _rec("zeta", "hello world")
    alpha = _rec("Alpha", "hello world")
    beta_off = _rec("beta", "hello world", enabled=False)
    assert AG.rank_and_filter([beta_off, zeta, alpha], "world") == [alpha, zeta, beta_off]


def test_full_ties_keep_input_order():
    records = [
        ShortcutRecord(id=str(i), alias="dup", expansion_text="same text")
        for i in (3, 0, 4, 1, 2)
    ]
    assert [r.id for r in AG.rank_and_filter(records, "dup")] == ["3", "0", "4", "1", "2"]
    assert [r.id for r in AG.rank_and_filter(records[::-1], "dup")] == ["2", "1", "4", "0", "3"]


def test_higher_score_wins_over_enabled_flag():
    exact_off = _rec("intro", enabled=False)
    prefix_on = _rec("introduction")
    assert AG.rank_and_filter([prefix_on, exact_off], "intro") == [exact_off, prefix_on]


def test_non_matching_records_are_dropped():
    records = [_rec("intro", "hello"), _rec("addr", "221b Baker Street")]
    assert AG.rank_and_filter(records, "baker") == [records[1]]


def test_rank_with_scores_exposes_scores():
    records = [_rec("intro"), _rec("sig")]
    out = AG.rank_with_scores(records, "intro")
    assert out == [ScoreResult(records[0], pytest.approx(1205 * 1.6))]
    assert AG.rank_with_scores(records, "") == [ScoreResult(r, 0.0) for r in records]


def test_weights_are_read_from_config(tmp_path):
    (tmp_path / "scoring.json").write_text(
        json.dumps({"weights": {"alias": 1.0, "text": 2.0}}), encoding="utf-8"
    )
    with temp_data_dir(tmp_path):
        clear_scoring_cache()
        assert AG.score_shortcut(_rec("sig", "x"), "sig") == pytest.approx(1203.0)
        assert AG.score_shortcut(_rec("zz", "sig stuff"), "sig") == pytest.approx(2006.0)
