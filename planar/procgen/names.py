"""
Seeded syllable-template name generation (based on hbi99/namegen).

A name is one draw to pick a template, then one draw per morpheme class in the
template. The same stream position always yields the same name.
"""

from __future__ import annotations

from typing import Protocol


class RandomStream(Protocol):
    def next(self) -> float: ...


PLANE_MORPHEMES: dict[int, tuple[str, ...]] = {
    1: (
        "b", "c", "d", "f", "g", "h", "i", "j", "k", "l", "m",
        "n", "p", "q", "r", "s", "t", "v", "w", "x", "y", "z",
    ),
    2: ("a", "e", "o", "u"),
    3: (
        "br", "cr", "dr", "fr", "gr", "pr", "str", "tr", "bl", "cl", "fl", "gl", "pl",
        "sl", "sc", "sk", "sm", "sn", "sp", "st", "sw", "ch", "sh", "th", "wh",
    ),
    4: (
        "ae", "ai", "ao", "au", "a", "ay", "ea", "ei", "eo", "eu", "e", "ey", "ua", "ue", "ui",
        "uo", "u", "uy", "ia", "ie", "iu", "io", "iy", "oa", "oe", "ou", "oi", "o", "oy",
    ),
    5: (
        "turn", "ter", "nus", "rus", "tania", "hiri", "hines", "gawa", "nides", "carro",
        "rilia", "stea", "lia", "lea", "ria", "nov", "phus", "mia", "nerth", "wei",
        "ruta", "tov", "zuno", "vis", "lara", "nia", "liv", "tera", "gantu", "yama",
        "tune", "ter", "nus", "cury", "bos", "pra", "thea", "nope", "tis", "clite",
    ),
    6: (
        "una", "ion", "iea", "iri", "illes", "ides", "agua", "olla", "inda", "eshan",
        "oria", "ilia", "erth", "arth", "orth", "oth", "illon", "ichi", "ov", "arvis",
        "ara", "ars", "yke", "yria", "onoe", "ippe", "osie", "one", "ore", "ade",
        "adus", "urn", "ypso", "ora", "iuq", "orix", "apus", "ion", "eon", "eron",
        "ao", "omia",
    ),
}

PLANE_TEMPLATES: tuple[tuple[int, ...], ...] = (
    (1, 2, 5),
    (2, 3, 6),
    (3, 4, 5),
    (4, 3, 6),
    (3, 4, 2, 5),
    (2, 1, 3, 6),
    (3, 4, 2, 5),
    (4, 3, 1, 6),
    (3, 4, 1, 4, 5),
    (4, 1, 4, 3, 6),
)

POWER_MORPHEMES: dict[int, tuple[str, ...]] = {
    1: ("a", "e", "i", "o", "u"),
    2: (
        "ph", "th", "ch", "sh", "br", "cr", "dr", "fr", "gr", "pr",
        "tr", "str", "sc", "sk", "sm", "sn", "sp", "st", "sw",
    ),
    3: (
        "ae", "ai", "ao", "au", "ay", "ea", "ei", "eo", "eu", "ey", "ua", "ue", "ui",
        "uo", "uy", "ia", "ie", "iu", "io", "iy", "oa", "oe", "ou", "oi", "oy",
    ),
    4: (
        "morp", "flux", "syn", "void", "rift", "dyn", "nov", "chron", "lum", "par", "ter",
        "psy", "phan", "man", "grav", "pyr", "cry", "hydr", "elec", "kin", "nan", "omni",
    ),
    5: (
        "ance", "ation", "esis", "ergy", "tide", "al", "ism", "ity", "mancy", "urgy",
        "pathy", "port", "shift", "burst", "pulse", "wave", "field", "storm", "force", "blade",
    ),
}

POWER_TEMPLATES: tuple[tuple[int, ...], ...] = (
    (1, 2, 1, 4, 5),
    (1, 4, 5),
    (2, 1, 4, 5),
    (1, 2, 3, 4, 5),
    (3, 4, 5),
)


def title_case(text: str) -> str:
    """Split camelCase words and upper-case the first letter ("fooBar" -> "Foo Bar")."""
    spaced = "".join(" " + ch if ch.isupper() else ch for ch in text)
    return spaced[:1].upper() + spaced[1:]


def compose_name(
    stream: RandomStream,
    templates: tuple[tuple[int, ...], ...],
    morphemes: dict[int, tuple[str, ...]],
) -> str:
    template = templates[int(stream.next() * len(templates))]
    parts = []
    for morpheme_class in template:
        table = morphemes[morpheme_class]
        parts.append(table[int(stream.next() * len(table))])
    return title_case("".join(parts))


def generate_name(stream: RandomStream) -> str:
    """Plane (and plane resource) name."""
    return compose_name(stream, PLANE_TEMPLATES, PLANE_MORPHEMES)


def generate_power_name(stream: RandomStream) -> str:
    return compose_name(stream, POWER_TEMPLATES, POWER_MORPHEMES)
