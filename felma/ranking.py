# Felma Priority Ranking
# Turns four 1-10 ratings into a priority rank, an action tier and the
# "leader to unblock" escalation flag. Pure functions, no I/O.

from collections.abc import Mapping
from dataclasses import dataclass

# (attribute name, wire name) for each rating, in input order
RATING_FIELDS = (
    ('customer_impact', 'customerImpact'),
    ('team_energy', 'teamEnergy'),
    ('frequency', 'frequency'),
    ('ease', 'ease'),
)

RATING_MIN = 1
RATING_MAX = 10

MAKE_IT_HAPPEN = 'Make it happen'
ACT_ON_IT_NOW = 'Act on it now'
MOVE_IT_FORWARD = 'Move it forward'
WHEN_TIME_ALLOWS = 'When time allows'
PARK_FOR_LATER = 'Park for later'


class RatingValidationError(ValueError):
    """One or more ratings are missing, not whole numbers, or out of range.

    `errors` maps each offending wire field name to the reason it failed.
    """

    def __init__(self, errors):
        self.errors = dict(errors)
        self.fields = list(self.errors)
        details = ', '.join(f'{name} {reason}' for name, reason in self.errors.items())
        super().__init__(f'Invalid ratings: {details}')


@dataclass(frozen=True)
class RankingConfig:
    """Every constant the ranking formula uses."""

    # Weights in hundredths (urgency) and tenths (feasibility) so the
    # product is exact before it is rounded
    impact_weight: int = 57
    energy_weight: int = 43
    urgency_scale: int = 100
    frequency_weight: int = 6
    ease_weight: int = 4
    feasibility_scale: int = 10
    # (lowest rank in band, label), highest band first
    tiers: tuple = (
        (70, MAKE_IT_HAPPEN),
        (50, ACT_ON_IT_NOW),
        (36, MOVE_IT_FORWARD),
        (25, WHEN_TIME_ALLOWS),
    )
    default_tier: str = PARK_FOR_LATER
    escalation_min_energy: int = 9
    escalation_max_ease: int = 3

    @property
    def tier_labels(self):
        """All labels, highest tier first."""
        return tuple(label for _, label in self.tiers) + (self.default_tier,)


DEFAULT_RANKING = RankingConfig()


@dataclass(frozen=True)
class RatingInput:
    customer_impact: int
    team_energy: int
    frequency: int
    ease: int

    def __post_init__(self):
        errors = {}
        for attr, wire in RATING_FIELDS:
            reason = _range_problem(getattr(self, attr))
            if reason:
                errors[wire] = reason
        if errors:
            raise RatingValidationError(errors)

    def as_dict(self):
        """Ratings keyed by their stored column names."""
        return {attr: getattr(self, attr) for attr, _ in RATING_FIELDS}


@dataclass(frozen=True)
class RankingResult:
    priority_rank: int
    action_tier: str
    escalation_flag: bool

    def as_fields(self):
        """Column names the item store persists the result under."""
        return {
            'priority_rank': self.priority_rank,
            'action_tier': self.action_tier,
            'leader_to_unblock': self.escalation_flag,
        }


def _range_problem(value):
    if isinstance(value, bool) or not isinstance(value, int):
        return 'must be a whole number'
    if value < RATING_MIN or value > RATING_MAX:
        return f'must be between {RATING_MIN} and {RATING_MAX}'
    return None


def _coerce_rating(value):
    """Return (int_value, None) or (None, reason)."""
    if value is None:
        return None, 'is required'
    if isinstance(value, bool):
        return None, 'must be a whole number'
    if isinstance(value, int):
        return value, None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None, 'is required'
        try:
            return int(text), None
        except ValueError:
            pass
        try:
            value = float(text)
        except ValueError:
            return None, 'must be a number'
    if isinstance(value, float):
        if not value.is_integer():
            return None, 'must be a whole number'
        return int(value), None
    return None, 'must be a number'


def parse_ratings(data):
    """Build a RatingInput from a request body or stored row.

    Accepts camelCase (customerImpact) or snake_case (customer_impact)
    keys. Numeric strings and whole floats are accepted; nothing is
    clamped or defaulted.

    Raises:
        RatingValidationError naming every field that failed
    """
    if isinstance(data, RatingInput):
        return data
    data = data or {}
    if not isinstance(data, Mapping):
        raise RatingValidationError({'ratings': 'must be an object of named ratings'})

    values = {}
    errors = {}
    for attr, wire in RATING_FIELDS:
        raw = data.get(attr) if attr in data else data.get(wire)
        value, reason = _coerce_rating(raw)
        if reason is None:
            reason = _range_problem(value)
        if reason:
            errors[wire] = reason
        else:
            values[attr] = value

    if errors:
        raise RatingValidationError(errors)
    return RatingInput(**values)


def has_any_rating(data):
    """True if the mapping carries at least one rating key."""
    data = data or {}
    if not isinstance(data, Mapping):
        return False
    return any(attr in data or wire in data for attr, wire in RATING_FIELDS)


def round_half_up(numerator, denominator):
    """Round a positive fraction to the nearest integer, halves going up."""
    return (2 * numerator + denominator) // (2 * denominator)


def priority_rank(ratings, config=DEFAULT_RANKING):
    urgency = config.impact_weight * ratings.customer_impact + config.energy_weight * ratings.team_energy
    feasibility = config.frequency_weight * ratings.frequency + config.ease_weight * ratings.ease
    return round_half_up(urgency * feasibility, config.urgency_scale * config.feasibility_scale)


def action_tier(rank, config=DEFAULT_RANKING):
    """Map a priority rank to its action tier label."""
    for threshold, label in config.tiers:
        if rank >= threshold:
            return label
    return config.default_tier


def needs_escalation(team_energy, ease, config=DEFAULT_RANKING):
    """A motivated team stuck on something hard to fix needs a leader."""
    return team_energy >= config.escalation_min_energy and ease <= config.escalation_max_ease


def compute_rank(ratings, config=DEFAULT_RANKING):
    """Score an item from its four ratings.

    Args:
        ratings: RatingInput, or a mapping that parse_ratings accepts
        config: RankingConfig holding the weights and thresholds

    Returns:
        RankingResult with priority_rank in [1, 100]

    Raises:
        RatingValidationError before any arithmetic if a rating is bad
    """
    ratings = parse_ratings(ratings)
    rank = priority_rank(ratings, config)
    return RankingResult(
        priority_rank=rank,
        action_tier=action_tier(rank, config),
        escalation_flag=needs_escalation(ratings.team_energy, ratings.ease, config),
    )
