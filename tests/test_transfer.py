import pytest

from itinerary_costs.calculate.transfer import calculate_transfer_cost
from itinerary_costs.models import ServicePriceDefinition, TransferItem, TransferMode


def _vehicle(**kwargs) -> TransferItem:
    kwargs.setdefault("id", "t1")
    kwargs.setdefault("day", 1)
    kwargs.setdefault("name", "Transfer")
    return TransferItem(mode=TransferMode.VEHICLE, **kwargs)


def test_ticket_prices_by_traveler_type(ctx):
    item = TransferItem(id="t1", day=1, name="Ferry", adult_ticket_price=500, child_ticket_price=300)
    result = calculate_transfer_cost(item, ctx)

    assert result.adult_cost == 1000
    assert result.child_cost == 300
    assert result.total_cost == 1300
    assert result.individual_contributions == {"A1": 500, "A2": 500, "C1": 300}
    assert "Mode: ticket" in result.configuration_details


def test_ticket_child_defaults_to_adult_price(ctx):
    item = TransferItem(id="t1", day=1, name="Ferry", adult_ticket_price=500)
    result = calculate_transfer_cost(item, ctx)

    assert result.child_cost == 500
    assert result.individual_contributions["C1"] == 500


def test_ticket_service_price_overrides_item(ctx):
    ctx.service_prices["SP-FERRY"] = ServicePriceDefinition(id="SP-FERRY", name="Ferry", price1=700)
    item = TransferItem(
        id="t1", day=1, name="Ferry", adult_ticket_price=500, child_ticket_price=250,
        selected_service_price_id="SP-FERRY",
    )
    result = calculate_transfer_cost(item, ctx)

    # no secondary price on the service -> item child price
    assert result.individual_contributions == {"A1": 700, "A2": 700, "C1": 250}
    assert result.total_cost == 1650


def test_vehicle_cost_prorated_per_head(ctx):
    result = calculate_transfer_cost(_vehicle(cost_per_vehicle=3000, vehicles=1), ctx)

    assert result.total_cost == 3000
    assert result.adult_cost == pytest.approx(2000)
    assert result.child_cost == pytest.approx(1000)
    assert result.individual_contributions == {"A1": 1000, "A2": 1000, "C1": 1000}


def test_vehicle_option_and_first_matching_surcharge(ctx):
    # Jan 1 is inside both "New Year" (+500) and "January" (+100): first wins
    item = _vehicle(selected_service_price_id="SP-AIRPORT", selected_vehicle_option_id="SEDAN", vehicles=2)
    result = calculate_transfer_cost(item, ctx)

    assert result.total_cost == (1200 + 500) * 2
    assert "New Year" in result.configuration_details
    assert "Type: Sedan" in result.configuration_details


def test_surcharge_follows_trip_day(ctx):
    item = _vehicle(day=10, selected_service_price_id="SP-AIRPORT", selected_vehicle_option_id="VAN")
    assert calculate_transfer_cost(item, ctx).total_cost == 2100

    item = _vehicle(day=40, selected_service_price_id="SP-AIRPORT", selected_vehicle_option_id="VAN")
    assert calculate_transfer_cost(item, ctx).total_cost == 2000


def test_vehicle_service_base_price_without_options(ctx):
    ctx.service_prices["SP-BOAT"] = ServicePriceDefinition(id="SP-BOAT", name="Longtail", price1=1800)
    item = _vehicle(day=20, selected_service_price_id="SP-BOAT", cost_per_vehicle=999)
    assert calculate_transfer_cost(item, ctx).total_cost == 1800


def test_unknown_vehicle_option_falls_back_to_item_cost(ctx):
    item = _vehicle(
        day=40, selected_service_price_id="SP-AIRPORT", selected_vehicle_option_id="BUS", cost_per_vehicle=2500,
    )
    result = calculate_transfer_cost(item, ctx)

    assert result.total_cost == 2500
    assert any("BUS" in w for w in result.warnings)


def test_vehicle_count_defaults_to_one(ctx):
    assert calculate_transfer_cost(_vehicle(cost_per_vehicle=900, vehicles=0), ctx).total_cost == 900


def test_vehicle_without_participants_keeps_total(ctx):
    item = _vehicle(cost_per_vehicle=3000, excluded_traveler_ids={"A1", "A2", "C1"})
    result = calculate_transfer_cost(item, ctx)

    assert result.total_cost == 3000
    assert result.individual_contributions == {}
    assert result.adult_cost == 0 and result.child_cost == 0


def test_missing_service_definition_warns(ctx):
    item = TransferItem(id="t1", day=1, name="Ferry", adult_ticket_price=400, selected_service_price_id="GONE")
    result = calculate_transfer_cost(item, ctx)

    assert result.total_cost == 1200
    assert any("GONE" in w for w in result.warnings)


def test_invalid_start_date_skips_surcharge(ctx):
    ctx.trip_start = None
    ctx.raw_start_date = "someday"
    item = _vehicle(selected_service_price_id="SP-AIRPORT", selected_vehicle_option_id="VAN")
    result = calculate_transfer_cost(item, ctx)

    assert result.total_cost == 2000
    assert any("someday" in w for w in result.warnings)
