"""Shared fixtures: a 2 adult + 1 child roster and small catalogs."""

from datetime import date

import pytest

from itinerary_costs.calculate.pricing import PricingContext
from itinerary_costs.models import (
    ActivityItem,
    DayItinerary,
    HotelCharacteristic,
    HotelDefinition,
    HotelItem,
    HotelRoomTypeDefinition,
    PaxDetails,
    RoomTypeSeasonalPrice,
    SelectedHotelRoomConfiguration,
    ServicePriceDefinition,
    SurchargePeriod,
    TransferItem,
    Traveler,
    TravelerType,
    TripData,
    TripSettings,
    VehicleOption,
)


@pytest.fixture
def travelers():
    return [
        Traveler(id="A1", label="Adult 1", type=TravelerType.ADULT),
        Traveler(id="A2", label="Adult 2", type=TravelerType.ADULT),
        Traveler(id="C1", label="Child 1", type=TravelerType.CHILD),
    ]


@pytest.fixture
def hotel():
    """Riverside hotel: 1000/night Jan 1-2, 1500/night from Jan 3 (2025)."""
    return HotelDefinition(
        id="H1",
        name="Riverside Hotel",
        province="Bangkok",
        room_types=[
            HotelRoomTypeDefinition(
                id="RT-DLX",
                name="Deluxe",
                extra_bed_allowed=True,
                characteristics=[HotelCharacteristic(key="Bed", value="King")],
                seasonal_prices=[
                    RoomTypeSeasonalPrice(
                        start_date=date(2025, 1, 1), end_date=date(2025, 1, 2),
                        rate=1000, extra_bed_rate=300, season_name="Low",
                    ),
                    RoomTypeSeasonalPrice(
                        start_date=date(2025, 1, 3), end_date=date(2025, 1, 31),
                        rate=1500, extra_bed_rate=400, season_name="High",
                    ),
                ],
            ),
            HotelRoomTypeDefinition(
                id="RT-STD",
                name="Standard",
                extra_bed_allowed=False,
                seasonal_prices=[
                    RoomTypeSeasonalPrice(
                        start_date=date(2025, 1, 1), end_date=date(2025, 12, 31), rate=600,
                    ),
                ],
            ),
        ],
    )


@pytest.fixture
def airport_transfer():
    return ServicePriceDefinition(
        id="SP-AIRPORT",
        name="Airport to City",
        vehicle_options=[
            VehicleOption(id="VAN", vehicle_type="Van", price=2000, max_passengers=9),
            VehicleOption(id="SEDAN", vehicle_type="Sedan", price=1200, max_passengers=3),
        ],
        surcharge_periods=[
            SurchargePeriod(name="New Year", start_date=date(2025, 1, 1), end_date=date(2025, 1, 2),
                            surcharge_amount=500),
            SurchargePeriod(name="January", start_date=date(2025, 1, 1), end_date=date(2025, 1, 31),
                            surcharge_amount=100),
        ],
    )


@pytest.fixture
def ctx(travelers, hotel, airport_transfer):
    return PricingContext(
        travelers=travelers,
        currency="THB",
        trip_start=date(2025, 1, 1),
        raw_start_date="2025-01-01",
        service_prices={airport_transfer.id: airport_transfer},
        hotel_definitions={hotel.id: hotel},
    )


@pytest.fixture
def make_trip(travelers):
    def _make(days, start_date="2025-01-01", num_days=3):
        return TripData(
            travelers=travelers,
            pax=PaxDetails(currency="THB", adults=2, children=1),
            settings=TripSettings(start_date=start_date, num_days=num_days),
            days={n: DayItinerary(items=items) for n, items in days.items()},
        )
    return _make


@pytest.fixture
def scenario(make_trip):
    """2 adults + 1 child, 3 days: ticket transfer, 3-night hotel for the adults, activity without the child."""
    hotel = HotelDefinition(
        id="H-BKK",
        name="Grand Bangkok",
        room_types=[
            HotelRoomTypeDefinition(
                id="RT-SUP",
                name="Superior",
                seasonal_prices=[
                    RoomTypeSeasonalPrice(start_date=date(2025, 1, 1), end_date=date(2025, 1, 2), rate=2000),
                    RoomTypeSeasonalPrice(start_date=date(2025, 1, 3), end_date=date(2025, 3, 31), rate=2500),
                ],
            ),
        ],
    )
    trip = make_trip({
        1: [
            TransferItem(id="t1", day=1, name="Airport boat", adult_ticket_price=500, child_ticket_price=300),
            HotelItem(
                id="h1", day=1, name="Grand Bangkok", checkout_day=4, hotel_definition_id="H-BKK",
                selected_rooms=[SelectedHotelRoomConfiguration(
                    room_type_definition_id="RT-SUP", room_type_name_cache="Superior",
                    num_rooms=1, assigned_traveler_ids=["A1", "A2"],
                )],
            ),
        ],
        2: [
            ActivityItem(id="a1", day=2, name="Temple tour", adult_price=1200, excluded_traveler_ids={"C1"}),
        ],
    })
    return trip, [hotel]
