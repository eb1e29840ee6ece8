from __future__ import annotations

import pytest

from contracts import add_to_free_agents, gen_base_moods, release
from league_context import PLAYER_FREE_AGENT, Phase
from league_repo import LeagueRepo
from players.errors import MOOD_LENGTH_MISMATCH, PlayerModelError
from players.types import Contract
from random_source import RandomSource


def test_base_moods_with_neutral_noise(ctx, make_teams, stub_rng) -> None:
    moods = gen_base_moods(make_teams(), ctx=ctx, rng=stub_rng)
    assert len(moods) == 30
    # hype 0.5, pop 2.0, noise mean -0.1
    assert moods[0] == pytest.approx(0.25 + 0.1 + 0.16 - 0.1)
    assert moods[29] == pytest.approx(0.25 + 0.0 + 0.16 - 0.1)
    assert moods == sorted(moods, reverse=True)


def test_base_moods_are_tid_ordered_and_clamped(ctx, make_teams) -> None:
    teams = list(reversed(make_teams()))
    for seed in range(20):
        moods = gen_base_moods(teams, ctx=ctx, rng=RandomSource(seed))
        assert len(moods) == 30
        assert all(0.0 <= m <= 1.0 for m in moods)


def test_base_moods_warn_on_team_count(ctx, make_teams, stub_rng, caplog) -> None:
    moods = gen_base_moods(make_teams(4), ctx=ctx, rng=stub_rng)
    assert len(moods) == 4
    assert "BASE_MOODS_TEAM_COUNT" in caplog.text


def test_low_value_player_has_no_mood(ctx, make_player, make_ratings, stub_rng) -> None:
    p = make_player(ratings=[make_ratings(base=35, pot=40)])
    add_to_free_agents(p, [0.5] * 30, ctx=ctx, rng=stub_rng)
    assert p.free_agent_mood == [0.0] * 30
    assert p.tid == PLAYER_FREE_AGENT


def test_mood_scales_with_player_value(ctx, make_player, make_ratings, stub_rng) -> None:
    p = make_player(ratings=[make_ratings(base=60, pot=70)])
    base = [i / 30 for i in range(30)]
    add_to_free_agents(p, base, ctx=ctx, rng=stub_rng)
    assert p.free_agent_mood == pytest.approx([m * 130 / 100 for m in base])


def test_demand_is_unsigned_and_phase_shifts_expiration(ctx, make_player, make_ratings, stub_rng) -> None:
    before = make_player(ratings=[make_ratings(base=60, pot=70)])
    add_to_free_agents(before, [0.5] * 30, ctx=ctx, rng=stub_rng, phase=Phase.REGULAR_SEASON)
    assert before.contract == Contract(amount=11650, exp=2014)
    assert before.salaries == []

    after = make_player(ratings=[make_ratings(base=60, pot=70)])
    add_to_free_agents(after, [0.5] * 30, ctx=ctx, rng=stub_rng, phase=Phase.PLAYOFFS)
    assert after.contract.exp == 2015

    # phase defaults to the context phase
    late = make_player(ratings=[make_ratings(base=60, pot=70)])
    add_to_free_agents(late, [0.5] * 30, ctx=ctx.with_phase(Phase.FREE_AGENCY), rng=stub_rng)
    assert late.contract.exp == 2015


def test_mood_vector_must_match_league_size(ctx, make_player, stub_rng) -> None:
    p = make_player(tid=3)
    with pytest.raises(PlayerModelError) as exc:
        add_to_free_agents(p, [0.5] * 29, ctx=ctx, rng=stub_rng)
    assert exc.value.code == MOOD_LENGTH_MISMATCH
    assert p.tid == 3


def test_add_to_free_agents_persists(tmp_path, ctx, make_player, stub_rng) -> None:
    with LeagueRepo(tmp_path / "league.sqlite3") as repo:
        repo.init_db()
        p = make_player(tid=3)
        add_to_free_agents(p, [0.5] * 30, ctx=ctx, rng=stub_rng, repo=repo)
        assert p.pid is not None
        stored = repo.get_player(p.pid)
        assert stored.tid == PLAYER_FREE_AGENT
        assert stored.contract == p.contract


def test_failed_write_leaves_player_untouched(tmp_path, ctx, make_player, stub_rng, monkeypatch) -> None:
    with LeagueRepo(tmp_path / "league.sqlite3") as repo:
        repo.init_db()
        p = make_player(tid=3)
        repo.put_player(p)
        before = p.to_row()

        def fail(player):
            raise RuntimeError("disk full")

        monkeypatch.setattr(repo, "put_player", fail)
        with pytest.raises(RuntimeError):
            add_to_free_agents(p, [0.5] * 30, ctx=ctx, rng=stub_rng, repo=repo)

        assert p.to_row() == before
        monkeypatch.undo()
        assert repo.get_player(p.pid).tid == 3


def test_release_records_owed_contract(tmp_path, ctx, make_player, make_ratings, make_teams, stub_rng) -> None:
    with LeagueRepo(tmp_path / "league.sqlite3") as repo:
        repo.init_db()
        repo.upsert_teams(make_teams())
        p = make_player(tid=7, ratings=[make_ratings(base=60, pot=70)], contract=Contract(amount=4000, exp=2016))
        repo.put_player(p)

        release(p, repo=repo, ctx=ctx, rng=stub_rng)

        assert p.tid == PLAYER_FREE_AGENT
        assert p.contract == Contract(amount=11650, exp=2014)
        assert len(p.free_agent_mood) == 30

        released = repo.list_released_players(pid=p.pid)
        assert len(released) == 1
        assert released[0].tid == 7
        assert released[0].contract == Contract(amount=4000, exp=2016)

        stored = repo.get_player(p.pid)
        assert stored.tid == PLAYER_FREE_AGENT
        assert stored.free_agent_mood == pytest.approx(p.free_agent_mood)
        assert repo.list_players(tid=7) == []
