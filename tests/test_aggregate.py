import copy

import pytest

from itinerary_costs.aggregate import calculate_all_costs
from itinerary_costs.config import UNASSIGNED_TRAVELER_ID
from itinerary_costs.models import (
    CostAssignment,
    HotelItem,
    MealItem,
    MiscItem,
    SelectedHotelRoomConfiguration,
    TransferItem,
    TransferMode,
    UnknownItem,
)


def test_end_to_end_scenario(scenario):
    trip, hotels = scenario
    summary = calculate_all_costs(trip, [], hotels)

    transfer, hotel, activity = summary.detailed_items
    assert (transfer.type, hotel.type, activity.type) == ("Transfers", "Hotels", "Activities")
    assert transfer.total_cost == 1300
    assert hotel.total_cost == 6500
    assert activity.total_cost == 2400
    assert summary.grand_total == 10200
    assert summary.per_person_totals == {"A1": 4950, "A2": 4950, "C1": 300}
    assert hotel.occupancy_details[0].total_room_block_cost == 6500
    assert activity.excluded_travelers == "Child 1"
    assert transfer.excluded_travelers == "None"
    assert summary.warnings == []


def test_days_reported_only_for_multi_day_trips(scenario, make_trip):
    trip, hotels = scenario
    assert [i.day for i in calculate_all_costs(trip, [], hotels).detailed_items] == [1, 1, 2]

    single = make_trip({1: [MealItem(id="m1", day=1, name="Lunch", adult_meal_price=100, total_meals=1)]},
                       num_days=1)
    assert calculate_all_costs(single).detailed_items[0].day is None


def test_days_visited_in_order(make_trip):
    trip = make_trip({
        3: [MealItem(id="m3", day=3, name="Dinner", adult_meal_price=1, total_meals=1)],
        1: [MealItem(id="m1", day=1, name="Breakfast", adult_meal_price=1, total_meals=1)],
    })
    assert [i.id for i in calculate_all_costs(trip).detailed_items] == ["m1", "m3"]


def test_unknown_item_type_is_skipped(make_trip):
    trip = make_trip({1: [
        UnknownItem(id="u1", day=1, name="Cruise", raw_type="cruise"),
        MealItem(id="m1", day=1, name="Lunch", adult_meal_price=100, total_meals=1),
    ]})
    summary = calculate_all_costs(trip)

    assert [i.id for i in summary.detailed_items] == ["m1"]
    assert summary.grand_total == 300
    assert any("cruise" in w for w in summary.warnings)


def test_bad_items_do_not_block_the_rest(make_trip):
    trip = make_trip({1: [
        HotelItem(id="h1", day=1, name="Ghost hotel", checkout_day=3, hotel_definition_id="NOPE",
                  selected_rooms=[SelectedHotelRoomConfiguration(room_type_definition_id="X")]),
        TransferItem(id="t1", day=1, name="Taxi", mode=TransferMode.VEHICLE, cost_per_vehicle=600),
    ]}, start_date="garbage")
    summary = calculate_all_costs(trip)

    assert summary.grand_total == 600
    ghost = summary.detailed_items[0]
    assert ghost.total_cost == 0
    assert ghost.warnings
    assert any("Ghost hotel" in w for w in summary.warnings)


def test_unattributed_cost_goes_to_unassigned_bucket(make_trip):
    trip = make_trip({1: [
        MiscItem(id="x1", day=1, name="Private guide", unit_cost=900,
                 excluded_traveler_ids={"A1", "A2", "C1"}),
        MealItem(id="m1", day=1, name="Lunch", adult_meal_price=100, total_meals=1),
    ]})
    summary = calculate_all_costs(trip)

    assert summary.grand_total == 1200
    assert summary.per_person_totals[UNASSIGNED_TRAVELER_ID] == 900
    assert sum(summary.per_person_totals.values()) == pytest.approx(summary.grand_total)
    assert any("not attributed" in w for w in summary.detailed_items[0].warnings)


def test_no_unassigned_bucket_when_everything_is_attributed(scenario):
    trip, hotels = scenario
    assert UNASSIGNED_TRAVELER_ID not in calculate_all_costs(trip, [], hotels).per_person_totals


def test_rounding_applied_once_at_the_end(make_trip):
    trip = make_trip({1: [
        MiscItem(id="x1", day=1, name="Tip", unit_cost=100, cost_assignment=CostAssignment.TOTAL),
        MiscItem(id="x2", day=1, name="Tip", unit_cost=100, cost_assignment=CostAssignment.TOTAL),
    ]})
    summary = calculate_all_costs(trip)

    # 200 / 3 per head, rounded only after both items are summed
    assert summary.per_person_totals == {"A1": 66.67, "A2": 66.67, "C1": 66.67}
    assert summary.grand_total == 200
    assert summary.detailed_items[0].adult_cost == 66.67
    assert summary.detailed_items[0].child_cost == 33.33


def test_properties_hold_for_scenario(scenario):
    trip, hotels = scenario
    summary = calculate_all_costs(trip, [], hotels)

    assert summary.grand_total == round(sum(i.total_cost for i in summary.detailed_items), 2)
    for item in summary.detailed_items:
        if item.type != "Hotels":
            assert round(item.adult_cost + item.child_cost, 2) == item.total_cost
    # the activity excluded the child: it contributes nothing to C1
    assert summary.per_person_totals["C1"] == 300


def test_deterministic_and_inputs_untouched(scenario):
    trip, hotels = scenario
    trip_before = copy.deepcopy(trip)
    hotels_before = copy.deepcopy(hotels)

    first = calculate_all_costs(trip, [], hotels)
    second = calculate_all_costs(trip, [], hotels)

    assert first == second
    assert first is not second
    assert trip == trip_before
    assert hotels == hotels_before


def test_partial_start_date_zeroes_hotel(scenario, make_trip):
    trip, hotels = scenario
    month_only = make_trip({1: [trip.days[1].items[1]]}, start_date="March 2025")
    summary = calculate_all_costs(month_only, [], hotels)

    [hotel] = summary.detailed_items
    assert hotel.total_cost == 0
    assert any("Invalid trip start date 'March 2025'" in w for w in hotel.warnings)
    assert summary.grand_total == 0


def test_exact_half_cent_rounds_up(make_trip):
    trip = make_trip({1: [
        MiscItem(id="x1", day=1, name="Locker", unit_cost=0.125, cost_assignment=CostAssignment.PER_PERSON),
    ]})
    summary = calculate_all_costs(trip)

    assert summary.per_person_totals == {"A1": 0.13, "A2": 0.13, "C1": 0.13}
    assert summary.grand_total == 0.38
    assert summary.detailed_items[0].child_cost == 0.13
