"""Load planner JSON (camelCase, as saved by the itinerary UI) into models.

Loading is lenient: missing optional fields get defaults and bad numbers
become zero, so a half-filled itinerary still loads and prices. Only a
document whose overall shape is wrong raises TripDataError.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from itinerary_costs.config import DEFAULT_CURRENCY
from itinerary_costs.models import (
    ActivityItem,
    ActivityPackage,
    CostAssignment,
    DayItinerary,
    HotelCharacteristic,
    HotelDefinition,
    HotelItem,
    HotelRoomTypeDefinition,
    ItemType,
    ItineraryItem,
    MealItem,
    MiscItem,
    PaxDetails,
    RoomTypeSeasonalPrice,
    SelectedHotelRoomConfiguration,
    ServicePriceDefinition,
    SurchargePeriod,
    TransferItem,
    TransferMode,
    Traveler,
    TravelerType,
    TripData,
    TripSettings,
    UnknownItem,
    VehicleOption,
)
from itinerary_costs.normalize.date_parser import parse_date

logger = logging.getLogger(__name__)


class TripDataError(ValueError):
    """The document is not shaped like a trip / catalog at all."""


# ---------------------------------------------------------------------------
# Scalar helpers
# ---------------------------------------------------------------------------

def _float(value: Any, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _opt_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _int(value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _enum(enum_cls, value: Any, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _objects(entries: Any, what: str) -> List[Dict]:
    """The entries of a JSON array, each required to be an object."""
    if not isinstance(entries, list):
        raise TripDataError(f"{what} must be a JSON array")
    for entry in entries:
        if not isinstance(entry, dict):
            raise TripDataError(f"{what} entries must be objects, got {entry!r}")
    return entries


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------

def _load_surcharge(raw: Dict) -> SurchargePeriod:
    return SurchargePeriod(
        name=_str(raw.get("name")),
        start_date=parse_date(raw.get("startDate")),
        end_date=parse_date(raw.get("endDate")),
        surcharge_amount=_float(raw.get("surchargeAmount")),
        id=_str(raw.get("id")),
        raw_start=_str(raw.get("startDate")),
        raw_end=_str(raw.get("endDate")),
    )


def _load_package(raw: Dict) -> ActivityPackage:
    closed_dates = [parse_date(d) for d in raw.get("specificClosedDates") or []]
    return ActivityPackage(
        id=_str(raw.get("id")),
        name=_str(raw.get("name")),
        price1=_float(raw.get("price1")),
        price2=_opt_float(raw.get("price2")),
        notes=_str(raw.get("notes")),
        validity_start_date=parse_date(raw.get("validityStartDate")),
        validity_end_date=parse_date(raw.get("validityEndDate")),
        closed_weekdays=[_int(d) for d in raw.get("closedWeekdays") or []],
        specific_closed_dates=[d for d in closed_dates if d is not None],
    )


def load_service_price(raw: Dict) -> ServicePriceDefinition:
    category = raw.get("category")
    mode = raw.get("transferMode")
    return ServicePriceDefinition(
        id=_str(raw.get("id")),
        name=_str(raw.get("name")),
        category=_enum(ItemType, category, None) if category else None,
        price1=_opt_float(raw.get("price1")),
        price2=_opt_float(raw.get("price2")),
        province=_str(raw.get("province")),
        currency=_str(raw.get("currency")),
        unit_description=_str(raw.get("unitDescription")),
        transfer_mode=_enum(TransferMode, mode, None) if mode else None,
        vehicle_options=[
            VehicleOption(
                id=_str(o.get("id")),
                vehicle_type=_str(o.get("vehicleType")),
                price=_float(o.get("price")),
                max_passengers=_int(o.get("maxPassengers")),
                notes=_str(o.get("notes")),
            )
            for o in raw.get("vehicleOptions") or []
        ],
        surcharge_periods=[_load_surcharge(s) for s in raw.get("surchargePeriods") or []],
        activity_packages=[_load_package(p) for p in raw.get("activityPackages") or []],
    )


def _load_seasonal_price(raw: Dict) -> RoomTypeSeasonalPrice:
    return RoomTypeSeasonalPrice(
        start_date=parse_date(raw.get("startDate")),
        end_date=parse_date(raw.get("endDate")),
        rate=_float(raw.get("rate")),
        extra_bed_rate=_opt_float(raw.get("extraBedRate")),
        season_name=_str(raw.get("seasonName")),
        id=_str(raw.get("id")),
        raw_start=_str(raw.get("startDate")),
        raw_end=_str(raw.get("endDate")),
    )


def load_hotel_definition(raw: Dict) -> HotelDefinition:
    room_types = []
    for rt in raw.get("roomTypes") or []:
        room_types.append(HotelRoomTypeDefinition(
            id=_str(rt.get("id")),
            name=_str(rt.get("name")),
            extra_bed_allowed=bool(rt.get("extraBedAllowed")),
            characteristics=[
                HotelCharacteristic(key=_str(c.get("key")), value=_str(c.get("value")), id=_str(c.get("id")))
                for c in rt.get("characteristics") or []
            ],
            seasonal_prices=[_load_seasonal_price(sp) for sp in rt.get("seasonalPrices") or []],
            notes=_str(rt.get("notes")),
        ))
    return HotelDefinition(
        id=_str(raw.get("id")),
        name=_str(raw.get("name")),
        province=_str(raw.get("province")),
        room_types=room_types,
    )


def load_service_prices(raw: List[Dict]) -> List[ServicePriceDefinition]:
    return [load_service_price(r) for r in _objects(raw, "Service price catalog")]


def load_hotel_definitions(raw: List[Dict]) -> List[HotelDefinition]:
    """Hotel catalog. Entries may be bare definitions or service prices carrying `hotelDetails`."""
    hotels = []
    for r in _objects(raw, "Hotel definition catalog"):
        if "roomTypes" not in r and isinstance(r.get("hotelDetails"), dict):
            r = r["hotelDetails"]
        hotels.append(load_hotel_definition(r))
    return hotels


# ---------------------------------------------------------------------------
# Itinerary items
# ---------------------------------------------------------------------------

def _base_fields(raw: Dict, day: int) -> Dict[str, Any]:
    return dict(
        id=_str(raw.get("id")),
        day=_int(raw.get("day"), day),
        name=_str(raw.get("name")),
        note=_str(raw.get("note")),
        country_id=_str(raw.get("countryId")),
        province=_str(raw.get("province")),
        excluded_traveler_ids=set(raw.get("excludedTravelerIds") or []),
        selected_service_price_id=_str(raw.get("selectedServicePriceId")),
    )


def _load_room(raw: Dict) -> SelectedHotelRoomConfiguration:
    return SelectedHotelRoomConfiguration(
        room_type_definition_id=_str(raw.get("roomTypeDefinitionId")),
        room_type_name_cache=_str(raw.get("roomTypeNameCache")),
        num_rooms=_int(raw.get("numRooms"), 1),
        add_extra_bed=bool(raw.get("addExtraBed")),
        assigned_traveler_ids=list(raw.get("assignedTravelerIds") or []),
        id=_str(raw.get("id")),
    )


def load_item(raw: Dict, day: int = 1) -> ItineraryItem:
    """Build the item variant named by raw["type"]."""
    if not isinstance(raw, dict):
        raise TripDataError(f"Itinerary item must be an object, got {raw!r}")
    base = _base_fields(raw, day)
    item_type = _str(raw.get("type")).lower()

    if item_type == ItemType.TRANSFER.value:
        return TransferItem(
            **base,
            mode=_enum(TransferMode, raw.get("mode"), TransferMode.TICKET),
            adult_ticket_price=_float(raw.get("adultTicketPrice")),
            child_ticket_price=_opt_float(raw.get("childTicketPrice")),
            vehicle_type=_str(raw.get("vehicleType")),
            cost_per_vehicle=_float(raw.get("costPerVehicle")),
            vehicles=_int(raw.get("vehicles"), 1),
            selected_vehicle_option_id=_str(raw.get("selectedVehicleOptionId")),
        )
    if item_type == ItemType.ACTIVITY.value:
        end_day = raw.get("endDay")
        return ActivityItem(
            **base,
            adult_price=_float(raw.get("adultPrice")),
            child_price=_opt_float(raw.get("childPrice")),
            end_day=_int(end_day) if end_day not in (None, "") else None,
            selected_package_id=_str(raw.get("selectedPackageId")),
        )
    if item_type == ItemType.HOTEL.value:
        return HotelItem(
            **base,
            checkout_day=_int(raw.get("checkoutDay")),
            hotel_definition_id=_str(raw.get("hotelDefinitionId")),
            selected_rooms=[_load_room(r) for r in raw.get("selectedRooms") or []],
        )
    if item_type == ItemType.MEAL.value:
        return MealItem(
            **base,
            adult_meal_price=_float(raw.get("adultMealPrice")),
            child_meal_price=_opt_float(raw.get("childMealPrice")),
            total_meals=_int(raw.get("totalMeals")),
        )
    if item_type == ItemType.MISC.value:
        return MiscItem(
            **base,
            unit_cost=_float(raw.get("unitCost")),
            quantity=_int(raw.get("quantity"), 1),
            cost_assignment=_enum(CostAssignment, raw.get("costAssignment"), CostAssignment.TOTAL),
        )

    logger.debug("Unrecognized item type %r for item %s", raw.get("type"), base["id"])
    return UnknownItem(**base, raw_type=_str(raw.get("type")))


# ---------------------------------------------------------------------------
# Trip
# ---------------------------------------------------------------------------

def load_trip(raw: Dict) -> TripData:
    if not isinstance(raw, dict):
        raise TripDataError("Trip document must be a JSON object")

    travelers_raw = _objects(raw.get("travelers") or [], "'travelers'")
    days_raw = raw.get("days") or {}
    if isinstance(days_raw, list):
        # [{items: [...]}, ...] -> day 1, 2, ...
        days_raw = {str(i + 1): d for i, d in enumerate(days_raw)}
    if not isinstance(days_raw, dict):
        raise TripDataError("'days' must be an object keyed by day number")

    travelers = [
        Traveler(
            id=_str(t.get("id")),
            label=_str(t.get("label")) or _str(t.get("id")),
            type=_enum(TravelerType, t.get("type"), TravelerType.ADULT),
        )
        for t in travelers_raw
    ]

    pax_raw = raw.get("pax") or {}
    settings_raw = raw.get("settings") or {}
    if not isinstance(pax_raw, dict) or not isinstance(settings_raw, dict):
        raise TripDataError("'pax' and 'settings' must be objects")
    pax = PaxDetails(
        currency=_str(pax_raw.get("currency")) or DEFAULT_CURRENCY,
        adults=_int(pax_raw.get("adults")),
        children=_int(pax_raw.get("children")),
    )
    settings = TripSettings(
        start_date=_str(settings_raw.get("startDate")),
        num_days=_int(settings_raw.get("numDays"), 1),
        budget=_opt_float(settings_raw.get("budget")),
    )

    days: Dict[int, DayItinerary] = {}
    for key, day_raw in days_raw.items():
        day_number = _int(key, -1)
        if day_number < 0:
            raise TripDataError(f"Day key {key!r} is not a day number")
        day_raw = day_raw or {}
        if not isinstance(day_raw, dict):
            raise TripDataError(f"Day {key!r} must be an object with 'items'")
        items = _objects(day_raw.get("items") or [], f"Day {key!r} items")
        days[day_number] = DayItinerary(items=[load_item(i, day_number) for i in items])

    return TripData(travelers=travelers, pax=pax, settings=settings, days=days)


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def _read_json(path: Union[str, Path]) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def load_trip_file(path: Union[str, Path]) -> TripData:
    return load_trip(_read_json(path))


def load_service_prices_file(path: Union[str, Path]) -> List[ServicePriceDefinition]:
    return load_service_prices(_read_json(path))


def load_hotel_definitions_file(path: Union[str, Path]) -> List[HotelDefinition]:
    return load_hotel_definitions(_read_json(path))
