"""Static map topology: the 42 territories and 6 continents.

The map is process-wide, read-only data shared by every game. Lookups are
backed by dictionaries built once at import time.
"""

from typing import Optional, Tuple

from ..models.territory import Continent, Territory

TERRITORIES: Tuple[Territory, ...] = (
    # North America (9 territories)
    Territory(
        "greenland", "Greenland", "north-america", ("iceland", "quebec", "northwest-territory")
    ),
    Territory("quebec", "Quebec", "north-america", ("greenland", "eastern-us", "ontario")),
    Territory(
        "eastern-us",
        "Eastern US",
        "north-america",
        ("quebec", "central-america", "western-us", "ontario"),
    ),
    Territory(
        "western-us",
        "Western US",
        "north-america",
        ("eastern-us", "central-america", "ontario", "alberta"),
    ),
    Territory(
        "alberta",
        "Alberta",
        "north-america",
        ("alaska", "northwest-territory", "ontario", "western-us"),
    ),
    Territory(
        "ontario",
        "Ontario",
        "north-america",
        ("quebec", "eastern-us", "western-us", "alberta", "northwest-territory"),
    ),
    Territory(
        "northwest-territory",
        "NW Territory",
        "north-america",
        ("alaska", "alberta", "ontario", "greenland"),
    ),
    Territory("alaska", "Alaska", "north-america", ("kamchatka", "northwest-territory", "alberta")),
    Territory(
        "central-america",
        "Central America",
        "north-america",
        ("western-us", "eastern-us", "venezuela"),
    ),
    # South America (4 territories)
    Territory("venezuela", "Venezuela", "south-america", ("central-america", "peru", "brazil")),
    Territory("peru", "Peru", "south-america", ("venezuela", "brazil", "argentina")),
    Territory(
        "brazil",
        "Brazil",
        "south-america",
        ("venezuela", "peru", "argentina", "north-africa"),
    ),
    Territory("argentina", "Argentina", "south-america", ("brazil", "peru")),
    # Africa (6 territories)
    Territory("madagascar", "Madagascar", "africa", ("east-africa", "south-africa")),
    Territory("south-africa", "South Africa", "africa", ("congo", "east-africa", "madagascar")),
    Territory("congo", "Congo", "africa", ("south-africa", "east-africa", "north-africa")),
    Territory(
        "east-africa",
        "East Africa",
        "africa",
        ("egypt", "middle-east", "north-africa", "congo", "south-africa", "madagascar"),
    ),
    Territory(
        "north-africa",
        "North Africa",
        "africa",
        ("brazil", "western-europe", "southern-europe", "egypt", "east-africa", "congo"),
    ),
    Territory(
        "egypt",
        "Egypt",
        "africa",
        ("east-africa", "north-africa", "southern-europe", "middle-east"),
    ),
    # Australia (4 territories)
    Territory("indonesia", "Indonesia", "australia", ("new-guinea", "west-australia", "thailand")),
    Territory(
        "new-guinea",
        "New Guinea",
        "australia",
        ("indonesia", "west-australia", "east-australia"),
    ),
    Territory("east-australia", "East Australia", "australia", ("west-australia", "new-guinea")),
    Territory(
        "west-australia",
        "West Australia",
        "australia",
        ("east-australia", "new-guinea", "indonesia"),
    ),
    # Europe (7 territories)
    Territory(
        "western-europe",
        "Western Europe",
        "europe",
        ("great-britain", "northern-europe", "southern-europe", "north-africa"),
    ),
    Territory(
        "southern-europe",
        "Southern Europe",
        "europe",
        ("egypt", "middle-east", "ukraine", "northern-europe", "western-europe", "north-africa"),
    ),
    Territory(
        "northern-europe",
        "Northern Europe",
        "europe",
        ("scandinavia", "southern-europe", "ukraine", "great-britain", "western-europe"),
    ),
    Territory(
        "ukraine",
        "Ukraine",
        "europe",
        ("scandinavia", "northern-europe", "southern-europe", "middle-east", "afghanistan", "ural"),
    ),
    Territory(
        "scandinavia",
        "Scandinavia",
        "europe",
        ("ukraine", "northern-europe", "iceland", "great-britain"),
    ),
    Territory("iceland", "Iceland", "europe", ("greenland", "great-britain", "scandinavia")),
    Territory(
        "great-britain",
        "Great Britain",
        "europe",
        ("iceland", "scandinavia", "western-europe", "northern-europe"),
    ),
    # Asia (12 territories)
    Territory(
        "afghanistan",
        "Afghanistan",
        "asia",
        ("ural", "ukraine", "middle-east", "india", "china"),
    ),
    Territory(
        "middle-east",
        "Middle East",
        "asia",
        ("egypt", "east-africa", "southern-europe", "ukraine", "afghanistan", "india"),
    ),
    Territory("india", "India", "asia", ("thailand", "china", "afghanistan", "middle-east")),
    Territory("thailand", "Thailand", "asia", ("indonesia", "china", "india")),
    Territory(
        "china",
        "China",
        "asia",
        ("thailand", "india", "afghanistan", "ural", "siberia", "mongolia"),
    ),
    Territory(
        "mongolia",
        "Mongolia",
        "asia",
        ("japan", "china", "irkutsk", "kamchatka", "siberia"),
    ),
    Territory("japan", "Japan", "asia", ("kamchatka", "mongolia")),
    Territory("ural", "Ural", "asia", ("ukraine", "afghanistan", "siberia", "china")),
    Territory(
        "kamchatka",
        "Kamchatka",
        "asia",
        ("alaska", "yakutsk", "irkutsk", "mongolia", "japan"),
    ),
    Territory("yakutsk", "Yakutsk", "asia", ("kamchatka", "irkutsk", "siberia")),
    Territory("irkutsk", "Irkutsk", "asia", ("yakutsk", "mongolia", "kamchatka", "siberia")),
    Territory(
        "siberia",
        "Siberia",
        "asia",
        ("ural", "china", "mongolia", "irkutsk", "yakutsk"),
    ),
)

CONTINENTS: Tuple[Continent, ...] = (
    Continent(
        "north-america",
        "North America",
        5,
        (
            "greenland",
            "quebec",
            "eastern-us",
            "western-us",
            "alberta",
            "ontario",
            "northwest-territory",
            "alaska",
            "central-america",
        ),
    ),
    Continent("south-america", "South America", 2, ("venezuela", "peru", "brazil", "argentina")),
    Continent(
        "africa",
        "Africa",
        3,
        ("madagascar", "south-africa", "congo", "east-africa", "north-africa", "egypt"),
    ),
    Continent(
        "australia",
        "Australia",
        2,
        ("indonesia", "new-guinea", "east-australia", "west-australia"),
    ),
    Continent(
        "europe",
        "Europe",
        5,
        (
            "western-europe",
            "southern-europe",
            "northern-europe",
            "ukraine",
            "scandinavia",
            "iceland",
            "great-britain",
        ),
    ),
    Continent(
        "asia",
        "Asia",
        7,
        (
            "afghanistan",
            "middle-east",
            "india",
            "thailand",
            "china",
            "mongolia",
            "japan",
            "ural",
            "kamchatka",
            "yakutsk",
            "irkutsk",
            "siberia",
        ),
    ),
)

_TERRITORIES_BY_ID = {territory.id: territory for territory in TERRITORIES}
_CONTINENTS_BY_ID = {continent.id: continent for continent in CONTINENTS}


def get_territory(territory_id: str) -> Optional[Territory]:
    return _TERRITORIES_BY_ID.get(territory_id)


def get_continent(continent_id: str) -> Optional[Continent]:
    return _CONTINENTS_BY_ID.get(continent_id)


def territory_ids() -> Tuple[str, ...]:
    """All territory IDs in map order."""
    return tuple(territory.id for territory in TERRITORIES)


def continent_of(territory_id: str) -> Optional[Continent]:
    territory = get_territory(territory_id)
    if territory is None:
        return None
    return get_continent(territory.continent_id)


def neighbors(territory_id: str) -> Tuple[str, ...]:
    """Territories adjacent to the given one (empty for unknown IDs)."""
    territory = get_territory(territory_id)
    if territory is None:
        return ()
    return territory.adjacent_territories


def are_adjacent(territory_id_1: str, territory_id_2: str) -> bool:
    """Check whether two territories share a border.

    Returns False if either ID is unknown.
    """
    if territory_id_2 not in _TERRITORIES_BY_ID:
        return False
    return territory_id_2 in neighbors(territory_id_1)
