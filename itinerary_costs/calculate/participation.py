"""Who takes part in an itinerary item."""

from typing import Iterable, List

from itinerary_costs.models import ParticipationResult, Traveler, TravelerType


def resolve_participation(excluded_ids: Iterable[str], travelers: List[Traveler]) -> ParticipationResult:
    """Split the roster into participating and excluded travelers.

    Excluded ids that are not on the roster are ignored.
    """
    excluded = set(excluded_ids or ())
    result = ParticipationResult()
    for t in travelers:
        if t.id in excluded:
            result.excluded_traveler_labels.append(t.label)
            continue
        result.participating_ids.append(t.id)
        if t.type == TravelerType.CHILD:
            result.child_count += 1
        else:
            result.adult_count += 1
    return result
