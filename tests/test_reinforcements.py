"""Tests for reinforcement accounting."""

from world_battle.engine.map_graph import get_continent, territory_ids
from world_battle.engine.reinforcements import (
    calculate_continent_bonus,
    calculate_reinforcements,
    calculate_territory_bonus,
    controlled_continents,
    player_controls_continent,
    reinforcement_breakdown,
)
from world_battle.models import ARMY_COLORS, GameState, Player, TerritoryState

# Territories spread over several continents so no continent is completed
SCATTERED = [
    "alaska", "greenland", "venezuela", "peru", "madagascar", "congo",
    "indonesia", "new-guinea", "iceland", "ukraine", "japan", "china",
]  # fmt: skip


def make_game(owned_by_p1):
    """Two-player game where player-1 owns exactly the given territories."""
    owned = set(owned_by_p1)
    players = [
        Player(id=f"player-{i + 1}", name=f"P{i + 1}", color=ARMY_COLORS[i]) for i in range(2)
    ]
    territories = [
        TerritoryState(tid, "player-1" if tid in owned else "player-2", 1)
        for tid in territory_ids()
    ]
    return GameState(
        game_id="g1",
        players=players,
        turn_order=["player-1", "player-2"],
        territories=territories,
    )


def test_territory_bonus_minimum():
    for count in (1, 5, 9):
        assert calculate_territory_bonus(make_game(SCATTERED[:count]), "player-1") == 3


def test_territory_bonus_twelve_territories():
    assert calculate_territory_bonus(make_game(SCATTERED), "player-1") == 4


def test_territory_bonus_whole_map():
    assert calculate_territory_bonus(make_game(territory_ids()), "player-1") == 14


def test_no_continent_bonus_for_scattered_territories():
    game = make_game(SCATTERED)
    assert controlled_continents(game, "player-1") == []
    assert calculate_continent_bonus(game, "player-1") == 0
    assert calculate_reinforcements(game, "player-1") == 4


def test_south_america_bonus():
    game = make_game(get_continent("south-america").territory_ids)

    assert player_controls_continent(game, "player-1", "south-america")
    assert calculate_continent_bonus(game, "player-1") == 2
    # 4 territories -> minimum 3, plus 2
    assert calculate_reinforcements(game, "player-1") == 5


def test_continent_not_controlled_with_one_missing():
    territories = list(get_continent("australia").territory_ids)[:-1]
    game = make_game(territories)
    assert not player_controls_continent(game, "player-1", "australia")


def test_unknown_continent():
    assert not player_controls_continent(make_game(SCATTERED), "player-1", "atlantis")


def test_whole_map_reinforcements():
    game = make_game(territory_ids())
    # 42 // 3 = 14, plus 5 + 2 + 3 + 2 + 5 + 7 = 24
    assert calculate_reinforcements(game, "player-1") == 38


def test_reinforcement_breakdown():
    territories = list(get_continent("africa").territory_ids) + list(
        get_continent("australia").territory_ids
    )
    breakdown = reinforcement_breakdown(make_game(territories), "player-1")

    assert breakdown.territory_bonus == 3
    assert breakdown.continent_bonus == 5
    assert breakdown.total == 8
    assert {c.id for c in breakdown.controlled_continents} == {"africa", "australia"}
