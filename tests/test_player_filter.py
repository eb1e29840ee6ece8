from __future__ import annotations

import pytest

from analytics.player_filter import FilterOptions, filter_players
from analytics.player_filter.fields import PERCENTAGE_STATS
from league_context import PLAYER_FREE_AGENT, PLAYER_UNDRAFTED
from players.errors import FILTER_UNKNOWN_FIELD, STATS_ROW_DUPLICATE, PlayerModelError
from players.generation import generate
from players.types import Contract, InjuryState, Player, SalaryEntry, StatsRow
from random_source import RandomSource
from teams import TeamDirectory


STAT_FIELDS = ("season", "age", "abbrev", "gp", "min", "pts", "fgp", "tpp", "per")


@pytest.fixture
def teams(make_teams) -> TeamDirectory:
    return TeamDirectory(make_teams())


@pytest.fixture
def veteran(make_player, make_stats):
    return make_player(
        tid=0,
        stats=[
            make_stats(season=2012, tid=0, gp=10, min=100.0, pts=200, fg=80, fga=160, tp=0, tpa=0, per=20.0),
            make_stats(season=2013, tid=0, gp=20, min=300.0, pts=100, fg=40, fga=100, tp=10, tpa=40, per=15.0),
        ],
    )


# ---------------------------------------------------------------------------
# Single season
# ---------------------------------------------------------------------------


def test_single_season_per_game(ctx, teams, veteran) -> None:
    out = filter_players(veteran, FilterOptions(season=2012, stats=STAT_FIELDS), ctx=ctx, teams=teams)
    assert out["stats"] == {
        "season": 2012,
        "age": 22,
        "abbrev": "T00",
        "gp": 10,
        "min": 10.0,
        "pts": 20.0,
        "fgp": 50.0,
        "tpp": 0,
        "per": 20.0,
    }
    assert "career_stats" not in out
    assert "ratings" not in out


def test_single_season_totals(ctx, teams, veteran) -> None:
    out = filter_players(veteran, FilterOptions(season=2013, stats=("gp", "pts", "tpp"), totals=True), ctx=ctx, teams=teams)
    assert out["stats"] == {"gp": 20, "pts": 100, "tpp": 25.0}


def test_zero_game_row_is_an_explicit_zero_record(ctx, teams, make_player, make_stats) -> None:
    p = make_player(stats=[make_stats(season=2013, tid=0, pts=12, fg=3, fga=4)])
    out = filter_players(p, FilterOptions(season=2013, stats=STAT_FIELDS), ctx=ctx, teams=teams)
    assert out["stats"]["season"] == 2013
    assert out["stats"]["abbrev"] == "T00"
    for key in ("gp", "min", "pts", "fgp", "tpp", "per"):
        assert out["stats"][key] == 0


def test_player_without_stats_is_excluded_unless_forced(ctx, teams, make_player) -> None:
    p = make_player(tid=3)
    assert filter_players(p, FilterOptions(season=2013, stats=("pts",)), ctx=ctx, teams=teams) is None

    forced = filter_players(
        p,
        FilterOptions(season=2013, stats=("season", "abbrev", "pts"), show_players_without_stats=True),
        ctx=ctx,
        teams=teams,
    )
    assert forced["stats"] == {"season": 2013, "abbrev": "T03", "pts": 0}


def test_no_stat_fields_means_no_gate(ctx, teams, make_player) -> None:
    out = filter_players(make_player(), FilterOptions(season=2013, attributes=("name",)), ctx=ctx, teams=teams)
    assert out == {"name": "Test Player"}


def test_current_season_rookie_is_included(ctx, teams, make_player) -> None:
    rookie = make_player(tid=PLAYER_UNDRAFTED, draft_year=2013)
    options = FilterOptions(season=2013, stats=("pts",), show_current_season_rookies=True)
    assert filter_players(rookie, options, ctx=ctx, teams=teams) == {"stats": {"pts": 0}}

    older = make_player(tid=PLAYER_UNDRAFTED, draft_year=2012)
    assert filter_players(older, options, ctx=ctx, teams=teams) is None


def test_missing_playoff_row_is_none(ctx, teams, veteran) -> None:
    out = filter_players(veteran, FilterOptions(season=2013, stats=("pts",), playoffs=True), ctx=ctx, teams=teams)
    assert out["stats"] == {"pts": 5.0}
    assert out["stats_playoffs"] is None


def test_playoff_row_is_shaped(ctx, teams, veteran, make_stats) -> None:
    veteran.stats.append(make_stats(season=2013, tid=0, playoffs=True, gp=4, pts=60))
    out = filter_players(veteran, FilterOptions(season=2013, stats=("pts",), playoffs=True), ctx=ctx, teams=teams)
    assert out["stats_playoffs"] == {"pts": 15.0}


def test_first_matching_row_wins_after_midseason_trade(ctx, teams, make_player, make_stats) -> None:
    p = make_player(
        tid=5,
        stats=[
            make_stats(season=2013, tid=0, gp=10, pts=100),
            make_stats(season=2013, tid=5, gp=5, pts=100),
        ],
    )
    assert filter_players(p, FilterOptions(season=2013, stats=("abbrev", "pts")), ctx=ctx, teams=teams)["stats"] == {
        "abbrev": "T00",
        "pts": 10.0,
    }
    assert filter_players(p, FilterOptions(season=2013, tid=5, stats=("abbrev", "pts")), ctx=ctx, teams=teams)["stats"] == {
        "abbrev": "T05",
        "pts": 20.0,
    }


def test_last_season_fallback(ctx, teams, make_player, make_stats) -> None:
    p = make_player(stats=[make_stats(season=2012, tid=2, gp=10, pts=50)])
    options = FilterOptions(season=2013, stats=("season", "pts"), use_last_season_if_empty=True)
    assert filter_players(p, options, ctx=ctx, teams=teams)["stats"] == {"season": 2012, "pts": 5.0}
    assert filter_players(p, FilterOptions(season=2013, stats=("pts",)), ctx=ctx, teams=teams) is None


# ---------------------------------------------------------------------------
# All seasons and career
# ---------------------------------------------------------------------------


def test_career_view(ctx, teams, veteran) -> None:
    out = filter_players(veteran, FilterOptions(stats=("season", "gp", "pts", "fgp", "per")), ctx=ctx, teams=teams)
    assert [s["season"] for s in out["stats"]] == [2012, 2013]
    career = out["career_stats"]
    assert career["season"] is None
    assert career["gp"] == 30
    assert career["pts"] == pytest.approx(10.0)
    assert career["fgp"] == pytest.approx(100.0 * 120 / 260)
    # minutes-weighted: (20*100 + 15*300) / 400
    assert career["per"] == pytest.approx(16.25)
    assert "stats_playoffs" not in out


def test_career_without_games_is_zero(ctx, teams, make_player) -> None:
    out = filter_players(
        make_player(),
        FilterOptions(stats=("gp", "pts", "per"), playoffs=True, show_players_without_stats=True),
        ctx=ctx,
        teams=teams,
    )
    assert out["stats"] == []
    assert out["stats_playoffs"] == []
    assert out["career_stats"] == {"gp": 0, "pts": 0, "per": 0.0}
    assert out["career_stats_playoffs"] == {"gp": 0, "pts": 0, "per": 0.0}


def test_career_excludes_playoffs(ctx, teams, veteran, make_stats) -> None:
    veteran.stats.append(make_stats(season=2013, tid=0, playoffs=True, gp=10, pts=300))
    out = filter_players(veteran, FilterOptions(stats=("gp", "pts"), playoffs=True, totals=True), ctx=ctx, teams=teams)
    assert out["career_stats"] == {"gp": 30, "pts": 300}
    assert out["career_stats_playoffs"] == {"gp": 10, "pts": 300}
    assert len(out["stats_playoffs"]) == 1


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


def test_computed_attributes(ctx, teams, make_player) -> None:
    p = make_player(tid=1, hgt=79, contract=Contract(amount=2000, exp=2014))
    p.salaries = [SalaryEntry(season=2013, amount=2000), SalaryEntry(season=2014, amount=2000)]
    options = FilterOptions(
        season=2013,
        attributes=(
            "age",
            "hgt_ft",
            "hgt_in",
            "contract",
            "cash_owed",
            "abbrev",
            "team_region",
            "team_name",
            "salaries",
            "salaries_total",
        ),
        num_games_remaining=41,
    )
    out = filter_players(p, options, ctx=ctx, teams=teams)
    assert out["age"] == 23
    assert (out["hgt_ft"], out["hgt_in"]) == (6, 7)
    assert out["contract"] == {"amount": 2.0, "exp": 2014}
    # two seasons owed, half of this one already paid
    assert out["cash_owed"] == pytest.approx(3.0)
    assert out["abbrev"] == "T01"
    assert out["team_region"] == "Region 1"
    assert out["team_name"] == "Name 1"
    assert out["salaries"] == [{"season": 2013, "amount": 2.0}, {"season": 2014, "amount": 2.0}]
    assert out["salaries_total"] == pytest.approx(4.0)


def test_free_agent_labels(ctx, teams, make_player) -> None:
    p = make_player(tid=PLAYER_FREE_AGENT)
    out = filter_players(p, FilterOptions(attributes=("abbrev", "team_region", "team_name")), ctx=ctx, teams=teams)
    assert out == {"abbrev": "FA", "team_region": "", "team_name": "Free Agent"}


def test_injury_is_healthy_for_past_seasons(ctx, teams, make_player) -> None:
    p = make_player()
    p.injury = InjuryState(type="Torn ACL", games_remaining=60)
    current = filter_players(p, FilterOptions(season=2013, attributes=("injury",)), ctx=ctx, teams=teams)
    past = filter_players(p, FilterOptions(season=2012, attributes=("injury",)), ctx=ctx, teams=teams)
    assert current["injury"] == {"type": "Torn ACL", "games_remaining": 60}
    assert past["injury"] == {"type": "Healthy", "games_remaining": 0}


def test_draft_attribute_with_noise(ctx, teams, make_player, make_ratings) -> None:
    p = make_player(ratings=[make_ratings(season=2010, base=50, pot=60, fuzz=3.0)], draft_year=2010)
    plain = filter_players(p, FilterOptions(attributes=("draft",)), ctx=ctx, teams=teams)["draft"]
    fuzzed = filter_players(p, FilterOptions(attributes=("draft",), apply_rating_noise=True), ctx=ctx, teams=teams)["draft"]
    assert plain["age"] == 20
    assert (plain["ovr"], plain["pot"]) == (50, 60)
    assert (fuzzed["ovr"], fuzzed["pot"]) == (53, 63)


# ---------------------------------------------------------------------------
# Ratings
# ---------------------------------------------------------------------------


def test_ratings_single_season_with_noise(ctx, teams, make_player, make_ratings, make_stats) -> None:
    p = make_player(
        ratings=[make_ratings(season=2012, base=40), make_ratings(season=2013, base=50, pot=55, fuzz=3.0)],
        stats=[make_stats(season=2013, tid=4, gp=1)],
    )
    fields = ("season", "age", "abbrev", "ovr", "pot", "skills", "fuzz")
    plain = filter_players(p, FilterOptions(season=2013, ratings=fields), ctx=ctx, teams=teams)["ratings"]
    assert plain == {"season": 2013, "age": 23, "abbrev": "T04", "ovr": 50, "pot": 55, "skills": [], "fuzz": 3.0}

    noisy = filter_players(p, FilterOptions(season=2013, ratings=fields, apply_rating_noise=True), ctx=ctx, teams=teams)
    assert noisy["ratings"]["ovr"] == 53
    assert noisy["ratings"]["pot"] == 58
    assert noisy["ratings"]["season"] == 2013
    assert noisy["ratings"]["fuzz"] == 3.0


def test_ratings_all_seasons_and_missing_season(ctx, teams, make_player, make_ratings) -> None:
    p = make_player(ratings=[make_ratings(season=2012, base=40), make_ratings(season=2013, base=50)])
    all_rows = filter_players(p, FilterOptions(ratings=("season", "ovr", "abbrev")), ctx=ctx, teams=teams)["ratings"]
    assert all_rows == [{"season": 2012, "ovr": 40, "abbrev": None}, {"season": 2013, "ovr": 50, "abbrev": None}]

    out = filter_players(p, FilterOptions(season=2010, ratings=("ovr",)), ctx=ctx, teams=teams)
    assert "ratings" not in out


# ---------------------------------------------------------------------------
# Lists, validation and purity
# ---------------------------------------------------------------------------


def test_list_input_drops_excluded_players(ctx, teams, veteran, make_player) -> None:
    out = filter_players([veteran, make_player(tid=2)], FilterOptions(season=2013, stats=("pts",)), ctx=ctx, teams=teams)
    assert out == [{"stats": {"pts": 5.0}}]
    assert filter_players([], FilterOptions(season=2013), ctx=ctx, teams=teams) == []


def test_unknown_field_is_rejected() -> None:
    with pytest.raises(PlayerModelError) as exc:
        FilterOptions(stats=("pts", "points", "xyz"))
    assert exc.value.code == FILTER_UNKNOWN_FIELD
    assert exc.value.details["unknown"] == ["points", "xyz"]

    with pytest.raises(PlayerModelError):
        FilterOptions(attributes=("salary",))


def test_filter_never_mutates_the_player(ctx, teams, veteran) -> None:
    before = veteran.to_row()
    options = FilterOptions(
        attributes=("name", "born", "face", "stats_tids", "draft", "injury", "contract"),
        ratings=("ovr", "pot", "skills"),
        stats=("gp", "pts", "per"),
        playoffs=True,
        apply_rating_noise=True,
    )
    out = filter_players(veteran, options, ctx=ctx, teams=teams)
    out["born"]["year"] = 1900
    out["stats_tids"].append(99)
    out["ratings"][0]["skills"].append("X")
    assert veteran.to_row() == before


def test_generated_player_passes_through(ctx, teams) -> None:
    p = generate(
        tid=3,
        age=21,
        profile="wing",
        base_rating=50,
        pot=65,
        draft_year=2013,
        new_league=True,
        scouting_rank=10,
        ctx=ctx,
        rng=RandomSource(5),
    )
    options = FilterOptions(
        season=2013,
        attributes=("name", "age", "abbrev", "contract", "draft"),
        ratings=("ovr", "pot", "skills"),
        stats=("gp", "pts"),
    )
    out = filter_players(p, options, ctx=ctx, teams=teams)
    assert out["age"] == 21
    assert out["abbrev"] == "T03"
    assert out["ratings"]["ovr"] == p.current_ratings.ovr
    assert out["stats"] == {"gp": 0, "pts": 0}


def test_draft_prospect_without_stats_gets_empty_record(ctx, teams) -> None:
    p = generate(
        tid=PLAYER_UNDRAFTED,
        age=19,
        profile="point",
        base_rating=40,
        pot=55,
        draft_year=2013,
        new_league=False,
        scouting_rank=15,
        ctx=ctx,
        rng=RandomSource(9),
    )
    assert p.stats == []
    fields = ("gp", "gs", "min", "pts", "trb", "ast", "per")

    assert filter_players(p, FilterOptions(season=2013, stats=fields), ctx=ctx, teams=teams) is None

    out = filter_players(
        p,
        FilterOptions(season=2013, attributes=("abbrev",), stats=fields, show_players_without_stats=True),
        ctx=ctx,
        teams=teams,
    )
    assert out["abbrev"] == "DP"
    empty = StatsRow(season=2013, tid=PLAYER_UNDRAFTED)
    assert out["stats"] == {k: getattr(empty, k) for k in fields}


@pytest.mark.parametrize("field", list(PERCENTAGE_STATS), ids=lambda f: f.value)
def test_percentage_with_games_but_no_attempts_is_zero(ctx, teams, make_player, make_stats, field) -> None:
    p = make_player(stats=[make_stats(season=2013, tid=0, gp=5, min=120.0, pts=10)])
    for totals in (False, True):
        out = filter_players(p, FilterOptions(season=2013, stats=(field.value,), totals=totals), ctx=ctx, teams=teams)
        assert out["stats"][field.value] == 0.0


# ---------------------------------------------------------------------------
# Duplicate stats rows
# ---------------------------------------------------------------------------


def test_duplicate_stats_rows_rejected_on_construction(make_player, make_stats) -> None:
    rows = [make_stats(season=2013, tid=0, gp=10, pts=100), make_stats(season=2013, tid=0, gp=2, pts=80)]
    with pytest.raises(PlayerModelError) as exc:
        make_player(stats=rows)
    assert exc.value.code == STATS_ROW_DUPLICATE

    # same season and team but regular season vs playoffs is fine
    make_player(stats=[rows[0], make_stats(season=2013, tid=0, playoffs=True, gp=4)])


def test_duplicate_stats_rows_rejected_on_load(make_player, make_stats) -> None:
    row = make_player(stats=[make_stats(season=2013, tid=0, gp=10, pts=100)]).to_row()
    row["stats"].append(make_stats(season=2013, tid=0, gp=2, pts=80).to_row())
    with pytest.raises(PlayerModelError) as exc:
        Player.from_row(row)
    assert exc.value.code == STATS_ROW_DUPLICATE
    assert exc.value.details["key"] == [2013, 0, False]


def test_duplicate_stats_rows_appended_later_are_rejected_by_filter(ctx, teams, make_player, make_stats) -> None:
    p = make_player(stats=[make_stats(season=2013, tid=0, gp=10, pts=100)])
    p.stats.append(make_stats(season=2013, tid=0, gp=2, pts=80))
    for options in (FilterOptions(season=2013, stats=("gp", "pts")), FilterOptions(stats=("gp", "pts"))):
        with pytest.raises(PlayerModelError) as exc:
            filter_players(p, options, ctx=ctx, teams=teams)
        assert exc.value.code == STATS_ROW_DUPLICATE
