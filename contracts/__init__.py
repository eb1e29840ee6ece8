"""contracts package public API.

We intentionally avoid importing `contracts.free_agency` at module import time.
Generation only needs the contract terms, and `contracts.free_agency` pulls in
team finances; free-agent helpers are exposed via lightweight lazy wrappers.
"""

from contracts.terms import contract_years, gen_contract, round_contract_amount, set_contract


def gen_base_moods(teams, *, ctx, rng):
    """Lazy wrapper around `contracts.free_agency.gen_base_moods`."""
    from contracts.free_agency import gen_base_moods as _gen_base_moods

    return _gen_base_moods(teams, ctx=ctx, rng=rng)


def add_to_free_agents(player, base_moods, *, ctx, rng, phase=None, repo=None):
    """Lazy wrapper around `contracts.free_agency.add_to_free_agents`."""
    from contracts.free_agency import add_to_free_agents as _add_to_free_agents

    return _add_to_free_agents(player, base_moods, ctx=ctx, rng=rng, phase=phase, repo=repo)


def release(player, *, repo, ctx, rng):
    """Lazy wrapper around `contracts.free_agency.release`."""
    from contracts.free_agency import release as _release

    return _release(player, repo=repo, ctx=ctx, rng=rng)


__all__ = [
    "contract_years",
    "round_contract_amount",
    "gen_contract",
    "set_contract",
    "gen_base_moods",
    "add_to_free_agents",
    "release",
]
