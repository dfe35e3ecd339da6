"""Entry point for running an exhibition bout."""

import logging
import sys

from draft_rpg.config import get_settings
from draft_rpg.engine import CombatLogger, DuelEngine, Fighter, RandomDie
from draft_rpg.models import Armor, Attributes, Combatant, DefenseChoice, Weapon
from draft_rpg.rules import AttackDirection, Exhaustion, LocationalDamage, Maneuver, Stance


def build_fighters(rest_units_per_point: int) -> tuple[Fighter, Fighter]:
    """Two stock fighters: a sword-and-mail veteran and a nimble axe wielder."""
    veteran = Combatant(
        name="Aldric",
        attributes=Attributes(
            strength=7,
            dexterity=6,
            constitution=7,
            reason=5,
            intuition=5,
            willpower=6,
            charisma=4,
            perception=6,
            empathy=3,
        ),
        weapon_skill=6,
        dodge_skill=3,
        weapon=Weapon.long_sword(),
        armor=Armor.chain_mail(),
    )
    raider = Combatant(
        name="Brena",
        attributes=Attributes(
            strength=9,
            dexterity=7,
            constitution=6,
            reason=4,
            intuition=6,
            willpower=5,
            charisma=5,
            perception=7,
            empathy=4,
        ),
        weapon_skill=5,
        dodge_skill=6,
        weapon=Weapon.great_axe(),
        armor=Armor.leather(),
    )

    raider_stance = Stance()
    raider_stance.select(Maneuver.ALL_OUT_ATTACK)

    return (
        Fighter(
            combatant=veteran,
            stance=Stance(),
            exhaustion=Exhaustion(veteran.attributes.stamina, rest_units_per_point=rest_units_per_point),
            locations=LocationalDamage(veteran.attributes.constitution),
            direction=AttackDirection.FRONT,
        ),
        Fighter(
            combatant=raider,
            stance=raider_stance,
            exhaustion=Exhaustion(raider.attributes.stamina, rest_units_per_point=rest_units_per_point),
            locations=LocationalDamage(raider.attributes.constitution),
            defense=DefenseChoice.DODGE,
            direction=AttackDirection.FRONT,
        ),
    )


def main() -> int:
    """Run the bout and print its log."""
    settings = get_settings()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    first, second = build_fighters(settings.rest_units_per_point)
    engine = DuelEngine.from_settings(settings, RandomDie(settings.seed), CombatLogger(combat_id=1))

    logging.info("Starting exhibition bout: %s vs %s", first.name, second.name)
    result = engine.run(first, second)

    if result.combat_log is not None:
        print(result.combat_log.format_readable())
    print(f"\n{result.message}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
