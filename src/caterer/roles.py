"""
Classification of free-text credit jobs into weighted canonical roles.
"""

from enum import Enum


class Role(Enum):
    WRITTEN_BY = "written by"
    CASTING_DIRECTOR = "casting director"
    PRODUCTION_DESIGNER = "production designer"
    EDITOR = "editor"
    COMPOSER = "composer"
    CINEMATOGRAPHER = "cinematographer"
    PRODUCER = "producer"
    BASED_ON = "based on"
    DIRECTOR = "director"
    OTHER = "other"


# Checked in order, first match wins
ROLE_KEYWORDS = (
    (
        Role.WRITTEN_BY,
        (
            "written",
            "script",
            "writer",
            "developed",
            "created",
            "story",
            "screenplay",
            "writing",
            "adapted",
            "devise",
            "idea",
        ),
    ),
    (Role.CASTING_DIRECTOR, ("casting",)),
    (Role.PRODUCTION_DESIGNER, ("designer",)),
    (Role.EDITOR, ("editor",)),
    (Role.COMPOSER, ("composer",)),
    (Role.CINEMATOGRAPHER, ("cinematographer", "photograph")),
    (Role.PRODUCER, ("producer",)),
    (Role.BASED_ON, ("based", "original", "novel")),
    (Role.DIRECTOR, ("director", "showrunner")),
)

ROLE_WEIGHTS = {
    Role.CINEMATOGRAPHER: 60,
    Role.COMPOSER: 60,
    Role.DIRECTOR: 50,
    Role.WRITTEN_BY: 40,
    Role.PRODUCTION_DESIGNER: 30,
    Role.EDITOR: 20,
    Role.BASED_ON: 20,
    Role.PRODUCER: 20,
    Role.CASTING_DIRECTOR: 10,
    Role.OTHER: 1,
}

MINIMUM_WEIGHT = ROLE_WEIGHTS[Role.OTHER]

ROLE_COLORS = {
    Role.CINEMATOGRAPHER: "magenta",
    Role.COMPOSER: "green",
    Role.DIRECTOR: "cyan",
    Role.WRITTEN_BY: "yellow",
    Role.BASED_ON: "yellow",
    Role.PRODUCTION_DESIGNER: "blue",
    Role.EDITOR: "blue",
    Role.PRODUCER: "blue",
    Role.CASTING_DIRECTOR: "blue",
    Role.OTHER: "red",
}


def normalize(job: str) -> Role:
    lowered = job.lower()
    for role, keywords in ROLE_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return role
    return Role.OTHER


def weight(job: str) -> int:
    return ROLE_WEIGHTS[normalize(job)]


def color(job: str) -> str:
    return ROLE_COLORS[normalize(job)]


def best_job(jobs) -> str:
    """Return the highest weighted job; the earliest one wins a tie."""
    if not jobs:
        raise ValueError("At least one job is required")
    best = jobs[0]
    for job in jobs[1:]:
        if weight(job) > weight(best):
            best = job
    return best


def is_stylistic(job: str) -> bool:
    return weight(job) > MINIMUM_WEIGHT
