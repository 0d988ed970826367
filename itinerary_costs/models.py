"""Data models for the itinerary cost engine."""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import ClassVar, Optional


class TravelerType(str, Enum):
    ADULT = "adult"
    CHILD = "child"


class ItemType(str, Enum):
    TRANSFER = "transfer"
    ACTIVITY = "activity"
    HOTEL = "hotel"
    MEAL = "meal"
    MISC = "misc"


class TransferMode(str, Enum):
    TICKET = "ticket"
    VEHICLE = "vehicle"


class CostAssignment(str, Enum):
    PER_PERSON = "perPerson"
    TOTAL = "total"


@dataclass
class Traveler:
    id: str  # e.g. "A1", "C1"
    label: str  # e.g. "Adult 1"
    type: TravelerType = TravelerType.ADULT


# ---------------------------------------------------------------------------
# Reference catalogs (service prices, hotel definitions)
# ---------------------------------------------------------------------------

@dataclass
class SurchargePeriod:
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    surcharge_amount: float = 0.0  # added per vehicle
    id: str = ""
    raw_start: str = ""  # original strings, kept for warnings
    raw_end: str = ""


@dataclass
class VehicleOption:
    id: str
    vehicle_type: str = ""
    price: float = 0.0
    max_passengers: int = 0
    notes: str = ""


@dataclass
class ActivityPackage:
    id: str
    name: str = ""
    price1: float = 0.0  # adult
    price2: Optional[float] = None  # child
    notes: str = ""
    validity_start_date: Optional[date] = None
    validity_end_date: Optional[date] = None
    closed_weekdays: list[int] = field(default_factory=list)  # 0 = Sunday
    specific_closed_dates: list[date] = field(default_factory=list)


@dataclass
class ServicePriceDefinition:
    id: str
    name: str = ""
    category: Optional[ItemType] = None
    price1: Optional[float] = None  # adult / base price
    price2: Optional[float] = None  # child / secondary price
    province: str = ""
    currency: str = ""
    unit_description: str = ""
    transfer_mode: Optional[TransferMode] = None
    vehicle_options: list[VehicleOption] = field(default_factory=list)
    surcharge_periods: list[SurchargePeriod] = field(default_factory=list)
    activity_packages: list[ActivityPackage] = field(default_factory=list)


@dataclass
class RoomTypeSeasonalPrice:
    """A closed date interval with a nightly rate."""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    rate: float = 0.0
    extra_bed_rate: Optional[float] = None
    season_name: str = ""
    id: str = ""
    raw_start: str = ""
    raw_end: str = ""


@dataclass
class HotelCharacteristic:
    key: str
    value: str
    id: str = ""


@dataclass
class HotelRoomTypeDefinition:
    id: str
    name: str = ""
    extra_bed_allowed: bool = False
    characteristics: list[HotelCharacteristic] = field(default_factory=list)
    seasonal_prices: list[RoomTypeSeasonalPrice] = field(default_factory=list)
    notes: str = ""


@dataclass
class HotelDefinition:
    id: str
    name: str = ""
    province: str = ""
    room_types: list[HotelRoomTypeDefinition] = field(default_factory=list)

    def room_type(self, room_type_id: str) -> Optional[HotelRoomTypeDefinition]:
        for rt in self.room_types:
            if rt.id == room_type_id:
                return rt
        return None


# ---------------------------------------------------------------------------
# Itinerary items: closed set of five variants
# ---------------------------------------------------------------------------

@dataclass
class ItineraryItem:
    id: str
    day: int
    name: str = ""
    note: str = ""
    country_id: str = ""
    province: str = ""
    excluded_traveler_ids: set[str] = field(default_factory=set)
    selected_service_price_id: str = ""

    item_type: ClassVar[Optional[ItemType]] = None


@dataclass
class TransferItem(ItineraryItem):
    mode: TransferMode = TransferMode.TICKET
    adult_ticket_price: float = 0.0
    child_ticket_price: Optional[float] = None
    vehicle_type: str = ""
    cost_per_vehicle: float = 0.0
    vehicles: int = 1
    selected_vehicle_option_id: str = ""

    item_type: ClassVar[ItemType] = ItemType.TRANSFER


@dataclass
class ActivityItem(ItineraryItem):
    adult_price: float = 0.0
    child_price: Optional[float] = None
    end_day: Optional[int] = None
    selected_package_id: str = ""

    item_type: ClassVar[ItemType] = ItemType.ACTIVITY


@dataclass
class SelectedHotelRoomConfiguration:
    room_type_definition_id: str
    room_type_name_cache: str = ""
    num_rooms: int = 1
    add_extra_bed: bool = False
    assigned_traveler_ids: list[str] = field(default_factory=list)
    id: str = ""


@dataclass
class HotelItem(ItineraryItem):
    checkout_day: int = 0
    hotel_definition_id: str = ""
    selected_rooms: list[SelectedHotelRoomConfiguration] = field(default_factory=list)

    item_type: ClassVar[ItemType] = ItemType.HOTEL


@dataclass
class MealItem(ItineraryItem):
    adult_meal_price: float = 0.0
    child_meal_price: Optional[float] = None
    total_meals: int = 0

    item_type: ClassVar[ItemType] = ItemType.MEAL


@dataclass
class MiscItem(ItineraryItem):
    unit_cost: float = 0.0
    quantity: int = 1
    cost_assignment: CostAssignment = CostAssignment.TOTAL

    item_type: ClassVar[ItemType] = ItemType.MISC


@dataclass
class UnknownItem(ItineraryItem):
    """Item whose type the loader did not recognize. Never priced."""
    raw_type: str = ""


# ---------------------------------------------------------------------------
# Trip
# ---------------------------------------------------------------------------

@dataclass
class TripSettings:
    start_date: str = ""  # ISO date string, parsed during aggregation
    num_days: int = 1
    budget: Optional[float] = None


@dataclass
class PaxDetails:
    currency: str = "THB"
    adults: int = 0
    children: int = 0


@dataclass
class DayItinerary:
    items: list[ItineraryItem] = field(default_factory=list)


@dataclass
class TripData:
    travelers: list[Traveler] = field(default_factory=list)
    pax: PaxDetails = field(default_factory=PaxDetails)
    settings: TripSettings = field(default_factory=TripSettings)
    days: dict[int, DayItinerary] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass
class ParticipationResult:
    adult_count: int = 0
    child_count: int = 0
    participating_ids: list[str] = field(default_factory=list)
    excluded_traveler_labels: list[str] = field(default_factory=list)

    @property
    def headcount(self) -> int:
        return self.adult_count + self.child_count


@dataclass
class HotelOccupancyDetail:
    room_type_name: str
    num_rooms: int = 0
    nights: int = 0
    characteristics: str = ""
    assigned_traveler_labels: str = "None"
    total_room_block_cost: float = 0.0
    extra_bed_added: bool = False
    note: str = ""  # e.g. "Room type definition missing"


@dataclass
class ItemCostResult:
    """What a single calculator returns for one itinerary item."""
    adult_cost: float = 0.0
    child_cost: float = 0.0
    total_cost: float = 0.0
    individual_contributions: dict[str, float] = field(default_factory=dict)
    configuration_details: str = ""
    excluded_traveler_labels: list[str] = field(default_factory=list)
    occupancy_details: Optional[list[HotelOccupancyDetail]] = None
    warnings: list[str] = field(default_factory=list)


@dataclass
class DetailedSummaryItem:
    id: str
    type: str  # display label, e.g. "Transfers"
    name: str
    day: Optional[int] = None
    note: str = ""
    province: str = ""
    configuration_details: str = ""
    excluded_travelers: str = "None"
    adult_cost: float = 0.0
    child_cost: float = 0.0
    total_cost: float = 0.0
    occupancy_details: Optional[list[HotelOccupancyDetail]] = None
    warnings: list[str] = field(default_factory=list)


@dataclass
class CostSummary:
    grand_total: float = 0.0
    per_person_totals: dict[str, float] = field(default_factory=dict)
    detailed_items: list[DetailedSummaryItem] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
