"""
Reference data: currencies, cities, activities, accommodations and transport costs.
"""
from sqlalchemy.orm import Session
from decimal import Decimal
import logging
from app.models.accommodation import Accommodation
from app.models.activity import Activity
from app.models.city import City
from app.models.currency import Currency
from app.models.transport import TransportCost

logger = logging.getLogger(__name__)

# code, name, symbol, units per 1 USD
CURRENCIES = [
    ("USD", "US Dollar", "$", "1"),
    ("EUR", "Euro", "€", "0.92"),
    ("GBP", "British Pound", "£", "0.79"),
    ("JPY", "Japanese Yen", "¥", "149.50"),
    ("KRW", "South Korean Won", "₩", "1330"),
    ("INR", "Indian Rupee", "₹", "83.20"),
    ("THB", "Thai Baht", "฿", "35.80"),
    ("AUD", "Australian Dollar", "A$", "1.52"),
    ("CAD", "Canadian Dollar", "C$", "1.36"),
    ("SGD", "Singapore Dollar", "S$", "1.34"),
]

# name, country, iso code, lat, lng, population, cost index, avg hotel, popularity, currency
CITIES = [
    ("Paris", "France", "FR", 48.8566, 2.3522, 2148000, "85", "180", 98, "EUR"),
    ("Rome", "Italy", "IT", 41.9028, 12.4964, 2873000, "75", "150", 95, "EUR"),
    ("London", "United Kingdom", "GB", 51.5074, -0.1278, 8982000, "90", "200", 97, "GBP"),
    ("Tokyo", "Japan", "JP", 35.6762, 139.6503, 13960000, "80", "160", 96, "JPY"),
    ("Seoul", "South Korea", "KR", 37.5665, 126.9780, 9776000, "70", "120", 90, "KRW"),
    ("Bangkok", "Thailand", "TH", 13.7563, 100.5018, 10539000, "40", "60", 92, "THB"),
    ("New York", "United States", "US", 40.7128, -74.0060, 8336000, "100", "250", 99, "USD"),
    ("Mumbai", "India", "IN", 19.0760, 72.8777, 12442000, "35", "70", 85, "INR"),
]

# city, name, category, cost, minutes, vendor
ACTIVITIES = [
    ("Paris", "Eiffel Tower Summit", "sightseeing", "35", 120, "SETE"),
    ("Paris", "Louvre Museum", "culture", "22", 180, "Musée du Louvre"),
    ("Paris", "Seine River Cruise", "sightseeing", "18", 60, "Bateaux Mouches"),
    ("Rome", "Colosseum Tour", "culture", "25", 150, "Parco Colosseo"),
    ("Rome", "Vatican Museums", "culture", "30", 180, "Musei Vaticani"),
    ("London", "Tower of London", "culture", "40", 150, "Historic Royal Palaces"),
    ("Tokyo", "Sushi Making Class", "food", "80", 120, None),
    ("Tokyo", "TeamLab Planets", "culture", "28", 90, "teamLab"),
    ("Seoul", "Gyeongbokgung Palace", "culture", "3", 120, None),
    ("Bangkok", "Grand Palace", "culture", "15", 120, None),
    ("New York", "Statue of Liberty Ferry", "sightseeing", "24", 180, "Statue City Cruises"),
    ("Mumbai", "Elephanta Caves", "adventure", "10", 240, None),
]

# city, provider, name, price per night, currency
ACCOMMODATIONS = [
    ("Paris", "Booking.com", "Hotel Le Marais", "190", "EUR"),
    ("Paris", "Airbnb", "Montmartre Studio", "120", "EUR"),
    ("Rome", "Booking.com", "Trastevere Inn", "140", "EUR"),
    ("London", "Expedia", "Covent Garden Hotel", "220", "GBP"),
    ("Tokyo", "Agoda", "Shinjuku Capsule", "6000", "JPY"),
    ("Bangkok", "Agoda", "Riverside Boutique", "1800", "THB"),
    ("New York", "Expedia", "Midtown Suites", "260", "USD"),
]

# from, to, mode, avg cost, minutes, provider, currency
TRANSPORT_COSTS = [
    ("Paris", "Rome", "plane", "120", 125, "Air France", "EUR"),
    ("Paris", "London", "train", "90", 140, "Eurostar", "EUR"),
    ("Rome", "Paris", "train", "150", 660, "Trenitalia", "EUR"),
    ("Tokyo", "Seoul", "plane", "250", 150, "Korean Air", "USD"),
    ("Seoul", "Bangkok", "plane", "320", 340, "Thai Airways", "USD"),
    ("London", "New York", "plane", "550", 480, "British Airways", "USD"),
]


def seed_reference_data(db: Session) -> None:
    """Insert reference rows; skipped when currencies already exist."""
    if db.query(Currency).count() > 0:
        logger.info("Reference data already present, skipping seed")
        return

    currencies = {}
    for code, name, symbol, rate in CURRENCIES:
        currencies[code] = Currency(code=code, name=name, symbol=symbol, exchange_rate_to_usd=Decimal(rate))
        db.add(currencies[code])
    db.flush()

    cities = {}
    for name, country, iso, lat, lng, population, cost_index, hotel, popularity, currency in CITIES:
        cities[name] = City(
            name=name, country=country, iso_country_code=iso, lat=lat, lng=lng,
            population=population, cost_index=Decimal(cost_index), avg_daily_hotel=Decimal(hotel),
            popularity_score=popularity, currency_id=currencies[currency].id, meta={}
        )
        db.add(cities[name])
    db.flush()

    for city, name, category, cost, minutes, vendor in ACTIVITIES:
        db.add(Activity(
            city_id=cities[city].id, name=name, category=category, cost=Decimal(cost),
            duration_minutes=minutes, vendor=vendor, currency_id=currencies["USD"].id, meta={}
        ))

    for city, provider, name, price, currency in ACCOMMODATIONS:
        db.add(Accommodation(
            city_id=cities[city].id, provider=provider, name=name, price_per_night=Decimal(price),
            currency=currency, currency_id=currencies[currency].id, meta={}
        ))

    for origin, destination, mode, cost, minutes, provider, currency in TRANSPORT_COSTS:
        db.add(TransportCost(
            from_city_id=cities[origin].id, to_city_id=cities[destination].id, mode=mode,
            avg_cost=Decimal(cost), avg_duration_minutes=minutes, provider=provider,
            currency_id=currencies[currency].id, meta={}
        ))

    db.commit()
    logger.info(
        f"Seeded {len(CURRENCIES)} currencies, {len(CITIES)} cities, {len(ACTIVITIES)} activities, "
        f"{len(ACCOMMODATIONS)} accommodations, {len(TRANSPORT_COSTS)} transport costs"
    )
