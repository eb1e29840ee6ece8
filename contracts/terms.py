from __future__ import annotations

"""contracts/terms.py

Demanded contract terms and the salary ledger.

``gen_contract`` is the only place a contract amount/length is computed from
ratings; ``set_contract`` is the only path that writes salary-ledger entries.
"""

from typing import Any

from helpers import bound, round_half_up
from league_context import LeagueContext
from players.types import Contract, Player, SalaryEntry
from random_source import RandomSource
from ratings.derive import rating

from . import config as cfg


def contract_years(ovr: int, pot: int) -> int:
    """Deal length a player asks for, before any randomization."""
    years = cfg.BASE_YEARS - round_half_up((pot - ovr) / cfg.POT_SURPLUS_DIVISOR)
    if years < cfg.MIN_YEARS:
        years = cfg.MIN_YEARS
    for pot_below, cap in cfg.LOW_POT_YEAR_CAPS:
        if pot < pot_below:
            years = cap
            break
    return int(years)


def round_contract_amount(amount: float) -> int:
    """Clamp to [MIN, MAX] and round to the nearest rounding unit."""
    clamped = bound(float(amount), cfg.MIN_CONTRACT, cfg.MAX_CONTRACT)
    unit = cfg.CONTRACT_ROUNDING
    return int(unit * round_half_up(clamped / unit))


def gen_contract(ratings: Any, randomize_exp: bool = False, *, ctx: LeagueContext, rng: RandomSource) -> Contract:
    """Contract a player with these ratings demands.

    ``randomize_exp`` assumes a random number of years already elapsed since
    signing; used when seeding a new league.

    Draws: one gauss, then one ``randint`` only when ``randomize_exp``.
    """
    ovr = int(rating(ratings, "ovr"))
    pot = int(rating(ratings, "pot"))

    raw_lo, raw_hi = cfg.AMOUNT_RAW_RANGE
    scale = ((2 * ovr + pot) * cfg.AMOUNT_VALUE_MULT - cfg.AMOUNT_VALUE_OFFSET) / (raw_hi - raw_lo)
    amount = scale * (cfg.MAX_CONTRACT - cfg.MIN_CONTRACT) + cfg.MIN_CONTRACT
    amount *= rng.gauss(1.0, cfg.AMOUNT_JITTER_SIGMA)

    years = contract_years(ovr, pot)
    if randomize_exp:
        years = rng.randint(1, years)

    return Contract(amount=round_contract_amount(amount), exp=int(ctx.season) + years - 1)


def set_contract(player: Player, contract: Contract, signed: bool, *, ctx: LeagueContext) -> Player:
    """Store ``contract`` on the player.

    ``signed`` distinguishes an official contract from a negotiation demand;
    only signed contracts append to ``player.salaries`` (one entry per season
    from the current season through expiration, inclusive).
    """
    player.contract = Contract(amount=int(contract.amount), exp=int(contract.exp))

    if signed:
        for season in range(int(ctx.season), int(contract.exp) + 1):
            player.salaries.append(SalaryEntry(season=season, amount=int(contract.amount)))

    return player
