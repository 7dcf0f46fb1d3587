"""Built-in candidate pool used when the places service is unavailable."""

from domain.entities.candidate import Candidate, GeoPoint
from domain.entities.session import SessionFilters

_DOWNTOWN = GeoPoint(latitude=37.7749, longitude=-122.4194)
_MIDTOWN = GeoPoint(latitude=37.7849, longitude=-122.4094)
_UPTOWN = GeoPoint(latitude=37.7649, longitude=-122.4294)

_ALL_WEEK = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MON_SAT = _ALL_WEEK[:6]
_TUE_SUN = _ALL_WEEK[1:]


def _fallback(
    n: int,
    name: str,
    address: str,
    phone_number: str,
    rating: float,
    ratings_total: int,
    price_level: int,
    types: tuple[str, ...],
    hours: tuple[str, ...],
    location: GeoPoint,
) -> Candidate:
    slug = name.lower().replace(" ", "")
    return Candidate(
        id=f"place_{n}",
        name=name,
        address=address,
        location=location,
        phone_number=phone_number,
        website=f"https://{slug}.com",
        rating=rating,
        user_ratings_total=ratings_total,
        price_level=price_level,
        types=types,
        opening_hours=hours,
        is_open_now=True,
    )


FALLBACK_POOL: tuple[Candidate, ...] = (
    _fallback(1, "Pizza Palace", "123 Main St, Downtown", "+1-555-0123",
              4.5, 1250, 2,
              ("pizza", "restaurant", "food"), _ALL_WEEK, _DOWNTOWN),
    _fallback(2, "Sushi Master", "456 Oak Ave, Midtown", "+1-555-0456",
              4.8, 890, 3,
              ("sushi", "japanese", "restaurant", "food"), _MON_SAT, _MIDTOWN),
    _fallback(3, "Taco Fiesta", "789 Pine St, Uptown", "+1-555-0789",
              4.2, 567, 1,
              ("mexican", "restaurant", "food"), _ALL_WEEK, _UPTOWN),
    _fallback(4, "Burger Joint", "321 Elm St, Downtown", "+1-555-0321",
              4.0, 1200, 2,
              ("american", "restaurant", "food"), _ALL_WEEK, _DOWNTOWN),
    _fallback(5, "Pasta House", "654 Maple Dr, Midtown", "+1-555-0654",
              4.6, 750, 3,
              ("italian", "restaurant", "food"), _MON_SAT, _MIDTOWN),
    _fallback(6, "Curry Corner", "987 Cedar Ln, Uptown", "+1-555-0987",
              4.4, 680, 2,
              ("indian", "restaurant", "food"), _ALL_WEEK, _UPTOWN),
    _fallback(7, "Pho Express", "147 Birch Ave, Downtown", "+1-555-0147",
              4.3, 420, 1,
              ("vietnamese", "restaurant", "food"), _MON_SAT, _DOWNTOWN),
    _fallback(8, "Steak House", "258 Spruce St, Midtown", "+1-555-0258",
              4.7, 950, 4,
              ("american", "steakhouse", "restaurant", "food"), _MON_SAT, _MIDTOWN),
    _fallback(9, "Ramen Shop", "369 Willow Way, Uptown", "+1-555-0369",
              4.5, 580, 2,
              ("japanese", "ramen", "restaurant", "food"), _ALL_WEEK, _UPTOWN),
    _fallback(10, "Greek Taverna", "741 Poplar Blvd, Downtown", "+1-555-0741",
              4.1, 320, 2,
              ("greek", "mediterranean", "restaurant", "food"), _MON_SAT, _DOWNTOWN),
    _fallback(11, "Thai Spice", "852 Magnolia Dr, Midtown", "+1-555-0852",
              4.4, 450, 2,
              ("thai", "restaurant", "food"), _ALL_WEEK, _MIDTOWN),
    _fallback(12, "BBQ Pit", "963 Hickory Ln, Uptown", "+1-555-0963",
              4.6, 780, 3,
              ("american", "bbq", "restaurant", "food"), _TUE_SUN, _UPTOWN),
    _fallback(13, "Seafood Market", "159 Cypress St, Downtown", "+1-555-0159",
              4.3, 620, 3,
              ("seafood", "restaurant", "food"), _MON_SAT, _DOWNTOWN),
    _fallback(14, "Vegan Garden", "357 Sycamore Ave, Midtown", "+1-555-0357",
              4.2, 380, 2,
              ("vegan", "vegetarian", "restaurant", "food"), _ALL_WEEK, _MIDTOWN),
    _fallback(15, "Dessert Cafe", "486 Cherry Way, Uptown", "+1-555-0486",
              4.5, 290, 2,
              ("cafe", "dessert", "restaurant", "food"), _ALL_WEEK, _UPTOWN),
)


def restricts_types(types: tuple[str, ...]) -> bool:
    """Tag lists that include the generic "restaurant" tag match everything."""
    return bool(types) and "restaurant" not in types


def shares_type(candidate: Candidate, types: tuple[str, ...]) -> bool:
    return not set(candidate.types).isdisjoint(types)


def filter_pool(
    filters: SessionFilters,
    pool: tuple[Candidate, ...] = FALLBACK_POOL,
) -> list[Candidate]:
    """Apply keyword, price and category filters to the pool, keeping order."""
    matched = list(pool)

    keyword = filters.keyword.strip().casefold()
    if keyword:
        matched = [
            c
            for c in matched
            if keyword in c.name.casefold()
            or any(keyword in t.casefold() for t in c.types)
        ]

    if filters.price_level > 0:
        matched = [c for c in matched if c.price_level == filters.price_level]

    if restricts_types(filters.types):
        matched = [c for c in matched if shares_type(c, filters.types)]

    return matched
