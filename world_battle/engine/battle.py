"""Dice-based combat between adjacent territories.

This module handles:
1. Attack validation (ownership, adjacency, army minimum)
2. Dice counts and rolls for both sides
3. Loss resolution (highest dice compared pairwise, ties to the defender)
4. Conquest (ownership transfer and the army that moves in)
5. Moving extra armies into a conquered territory

Functions operate on GameState territory entries by ID and keep no state
of their own. Dice come from the game's RNG.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from ..models.game import GameState
from ..models.territory import TerritoryState
from ..utils import DIE_SIDES, MAX_ATTACKER_DICE, MAX_DEFENDER_DICE, MIN_ATTACKING_ARMIES
from .errors import ErrorCode, GameRuleError
from .map_graph import are_adjacent

logger = logging.getLogger(__name__)


@dataclass
class BattleRoll:
    """Result of one exchange of dice.

    Attributes:
        attacker_dice: Attacker's dice, sorted high to low
        defender_dice: Defender's dice, sorted high to low
        attacker_losses: Armies lost by the attacker
        defender_losses: Armies lost by the defender
        attacker_armies_remaining: Attacking territory armies after losses
        defender_armies_remaining: Defending territory armies after losses
        territory_conquered: True if the defender was wiped out
    """

    attacker_dice: List[int]
    defender_dice: List[int]
    attacker_losses: int
    defender_losses: int
    attacker_armies_remaining: int
    defender_armies_remaining: int
    territory_conquered: bool


@dataclass
class AttackResult:
    """Result of a single attack or an auto-attack.

    Attributes:
        from_territory: Attacking territory ID
        to_territory: Defending territory ID
        rolls: Every roll performed, in order
        territory_conquered: True if the defending territory changed hands
        eliminated_players: Players knocked out by this attack (set by the
            turn state machine after its elimination check)
    """

    from_territory: str
    to_territory: str
    rolls: List[BattleRoll] = field(default_factory=list)
    territory_conquered: bool = False
    eliminated_players: List[str] = field(default_factory=list)

    @property
    def attacker_losses(self) -> int:
        return sum(roll.attacker_losses for roll in self.rolls)

    @property
    def defender_losses(self) -> int:
        return sum(roll.defender_losses for roll in self.rolls)


def attacker_dice_count(armies: int) -> int:
    """Attacker rolls one die per army beyond the one left behind, max 3."""
    if armies < MIN_ATTACKING_ARMIES:
        return 0
    return min(armies - 1, MAX_ATTACKER_DICE)


def defender_dice_count(armies: int) -> int:
    """Defender rolls 1 die with a single army, otherwise 2."""
    if armies < 1:
        return 0
    return min(armies, MAX_DEFENDER_DICE)


def roll_dice(game: GameState, count: int) -> List[int]:
    """Roll `count` six-sided dice, sorted high to low."""
    return sorted((game.rng.randint(1, DIE_SIDES) for _ in range(count)), reverse=True)


def compare_dice(attacker_dice: List[int], defender_dice: List[int]) -> Tuple[int, int]:
    """Compare dice pairwise and count losses.

    Both lists are sorted high to low before comparing. Only as many pairs
    as the shorter list are compared. Ties go to the defender.

    Args:
        attacker_dice: Attacker's dice
        defender_dice: Defender's dice

    Returns:
        Tuple of (attacker_losses, defender_losses)
    """
    attacker_sorted = sorted(attacker_dice, reverse=True)
    defender_sorted = sorted(defender_dice, reverse=True)

    attacker_losses = 0
    defender_losses = 0
    for attack, defend in zip(attacker_sorted, defender_sorted):
        if attack > defend:
            defender_losses += 1
        else:
            attacker_losses += 1
    return attacker_losses, defender_losses


def validate_attack(
    game: GameState, from_territory_id: str, to_territory_id: str, attacking_player_id: str
) -> Tuple[TerritoryState, TerritoryState]:
    """Check that an attack is legal.

    Args:
        game: Current game state
        from_territory_id: Attacking territory
        to_territory_id: Defending territory
        attacking_player_id: Player launching the attack

    Returns:
        Tuple of (attacking territory state, defending territory state)

    Raises:
        GameRuleError: If the attack is not allowed
    """
    attacking = game.get_territory_state(from_territory_id)
    defending = game.get_territory_state(to_territory_id)

    if attacking is None:
        raise GameRuleError(
            ErrorCode.TERRITORY_NOT_FOUND, f"Attacking territory '{from_territory_id}' not found"
        )
    if defending is None:
        raise GameRuleError(
            ErrorCode.TERRITORY_NOT_FOUND, f"Defending territory '{to_territory_id}' not found"
        )
    if attacking.occupied_by != attacking_player_id:
        raise GameRuleError(ErrorCode.NOT_OWNER, "You do not own the attacking territory")
    if defending.occupied_by == attacking_player_id:
        raise GameRuleError(ErrorCode.SELF_ATTACK, "Cannot attack your own territory")
    if not are_adjacent(from_territory_id, to_territory_id):
        raise GameRuleError(
            ErrorCode.NOT_ADJACENT,
            f"Territories are not adjacent: {from_territory_id} -> {to_territory_id}",
        )
    if attacking.armies < MIN_ATTACKING_ARMIES:
        raise GameRuleError(
            ErrorCode.INSUFFICIENT_ARMIES,
            f"Attacking territory must have at least {MIN_ATTACKING_ARMIES} armies",
        )

    return attacking, defending


def perform_attack_roll(
    game: GameState, attacking: TerritoryState, defending: TerritoryState
) -> BattleRoll:
    """Roll dice for one exchange without touching the territories."""
    attacker_dice = roll_dice(game, attacker_dice_count(attacking.armies))
    defender_dice = roll_dice(game, defender_dice_count(defending.armies))

    attacker_losses, defender_losses = compare_dice(attacker_dice, defender_dice)
    defender_remaining = defending.armies - defender_losses

    return BattleRoll(
        attacker_dice=attacker_dice,
        defender_dice=defender_dice,
        attacker_losses=attacker_losses,
        defender_losses=defender_losses,
        attacker_armies_remaining=attacking.armies - attacker_losses,
        defender_armies_remaining=defender_remaining,
        territory_conquered=defender_remaining == 0,
    )


def _apply_roll(
    attacking: TerritoryState,
    defending: TerritoryState,
    roll: BattleRoll,
    attacking_player_id: str,
) -> None:
    """Apply a roll's losses, and the conquest transfer if it wiped out the defender."""
    attacking.armies = roll.attacker_armies_remaining
    defending.armies = roll.defender_armies_remaining

    logger.debug(
        f"{attacking.territory_id} {roll.attacker_dice} vs {defending.territory_id} "
        f"{roll.defender_dice}: losses {roll.attacker_losses}/{roll.defender_losses}"
    )

    if roll.territory_conquered:
        defending.occupied_by = attacking_player_id
        # One army moves in with the conquest
        defending.armies = 1
        attacking.armies -= 1
        logger.info(
            f"{attacking_player_id} conquered {defending.territory_id} "
            f"from {attacking.territory_id}"
        )


def execute_single_attack(
    game: GameState, from_territory_id: str, to_territory_id: str, attacking_player_id: str
) -> AttackResult:
    """Validate and resolve exactly one roll of the dice."""
    attacking, defending = validate_attack(
        game, from_territory_id, to_territory_id, attacking_player_id
    )

    roll = perform_attack_roll(game, attacking, defending)
    _apply_roll(attacking, defending, roll, attacking_player_id)

    return AttackResult(
        from_territory=from_territory_id,
        to_territory=to_territory_id,
        rolls=[roll],
        territory_conquered=roll.territory_conquered,
    )


def execute_auto_attack(
    game: GameState, from_territory_id: str, to_territory_id: str, attacking_player_id: str
) -> AttackResult:
    """Keep rolling until the territory falls or the attacker runs out.

    The attack is validated once. Rolling stops when the attacking
    territory is down to a single army or the defender is wiped out.
    Each roll removes at least one army, so the loop always ends.
    """
    attacking, defending = validate_attack(
        game, from_territory_id, to_territory_id, attacking_player_id
    )

    result = AttackResult(from_territory=from_territory_id, to_territory=to_territory_id)
    while attacking.armies >= MIN_ATTACKING_ARMIES:
        roll = perform_attack_roll(game, attacking, defending)
        result.rolls.append(roll)
        _apply_roll(attacking, defending, roll, attacking_player_id)

        if roll.territory_conquered:
            result.territory_conquered = True
            break

    logger.debug(
        f"Auto-attack {from_territory_id} -> {to_territory_id}: {len(result.rolls)} rolls, "
        f"conquered={result.territory_conquered}"
    )
    return result


def move_armies_after_conquest(
    game: GameState, from_territory_id: str, to_territory_id: str, army_count: int
) -> None:
    """Move extra armies between two territories of the same owner.

    Moving 0 armies is allowed and changes nothing.

    Raises:
        GameRuleError: If either territory is unknown, owners differ, the
            count is negative, or the source would keep fewer than 1 army
    """
    from_territory = game.get_territory_state(from_territory_id)
    to_territory = game.get_territory_state(to_territory_id)

    if from_territory is None or to_territory is None:
        raise GameRuleError(ErrorCode.TERRITORY_NOT_FOUND, "Territory not found")
    if from_territory.occupied_by != to_territory.occupied_by:
        raise GameRuleError(
            ErrorCode.MIXED_OWNERSHIP, "Territories must belong to same player"
        )
    if army_count < 0:
        raise GameRuleError(
            ErrorCode.INVALID_ARMY_COUNT, f"Army count cannot be negative, got {army_count}"
        )
    if from_territory.armies - army_count < 1:
        raise GameRuleError(
            ErrorCode.INSUFFICIENT_ARMIES, "Must leave at least 1 army in source territory"
        )

    from_territory.armies -= army_count
    to_territory.armies += army_count
