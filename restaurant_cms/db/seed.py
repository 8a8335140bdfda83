"""Database seeding helpers."""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from restaurant_cms.core.config import settings
from restaurant_cms.models import Contact, MediaArticle, Menu, MenuItem, MenuSection, OperatingHours, Restaurant, Wine

logger = logging.getLogger(__name__)

DEMO_HOURS: list[tuple[int, str, str, bool]] = [
    (0, "10:00", "15:00", False),
    (1, "11:00", "21:00", True),
    (2, "11:00", "21:00", False),
    (3, "11:00", "21:00", False),
    (4, "11:00", "22:00", False),
    (5, "11:00", "23:00", False),
    (6, "10:00", "23:00", False),
]

DEMO_CONTACTS: list[tuple[str, str, str]] = [
    ("phone", "Reservations", "(212) 555-0146"),
    ("address", "Restaurant", "46 Harbor Street, New York, NY"),
    ("email", "General", "hello@example.com"),
    ("social", "Instagram", "https://instagram.com/example"),
]

DEMO_MENU: list[tuple[str, list[tuple[str, str, str | None, bool]]]] = [
    (
        "Starters",
        [
            ("Poke Bowl", "Ahi tuna, shoyu, sweet onion", "16.00", True),
            ("Spam Musubi", "Grilled spam, rice, nori", "9.00", True),
            ("Seasonal Soup", "Ask your server", None, False),
        ],
    ),
    (
        "Mains",
        [
            ("Huli Huli Chicken", "Rotisserie chicken, pineapple glaze", "28.00", True),
            ("Loco Moco", "Beef patty, fried egg, brown gravy", "24.00", True),
        ],
    ),
    (
        "Desserts",
        [
            ("Haupia Pie", "Coconut custard, chocolate crust", "11.00", True),
        ],
    ),
]


def _seed_restaurant(session: Session) -> Restaurant:
    restaurant = Restaurant(
        slug=settings.restaurant_slug,
        name=settings.site_name,
        tagline="Island cooking in the city",
        description="A neighbourhood restaurant serving seasonal plates and a focused wine list.",
    )
    session.add(restaurant)
    session.flush()

    for day, open_time, close_time, is_closed in DEMO_HOURS:
        session.add(
            OperatingHours(
                restaurant_id=restaurant.id,
                day_of_week=day,
                open_time=open_time,
                close_time=close_time,
                is_closed=is_closed,
            )
        )
    for sort_order, (contact_type, label, value) in enumerate(DEMO_CONTACTS, start=1):
        session.add(
            Contact(restaurant_id=restaurant.id, type=contact_type, label=label, value=value, sort_order=sort_order)
        )

    menu = Menu(restaurant_id=restaurant.id, name="Dinner", description="Served nightly", is_active=True)
    session.add(menu)
    session.flush()
    for section_order, (section_name, items) in enumerate(DEMO_MENU):
        section = MenuSection(menu_id=menu.id, name=section_name, sort_order=section_order)
        session.add(section)
        session.flush()
        for item_order, (name, description, price, is_available) in enumerate(items):
            session.add(
                MenuItem(
                    section_id=section.id,
                    name=name,
                    description=description,
                    price=Decimal(price) if price is not None else None,
                    is_available=is_available,
                    sort_order=item_order,
                )
            )
    return restaurant


def _seed_wines(session: Session, restaurant_id: int) -> None:
    session.add_all(
        [
            Wine(
                restaurant_id=restaurant_id,
                name="Sancerre Les Baronnes",
                producer="Henri Bourgeois",
                vintage=2022,
                region="Loire Valley",
                country="France",
                grape_varieties=["Sauvignon Blanc"],
                type="WHITE",
                glass_price=Decimal("16.00"),
                bottle_price=Decimal("64.00"),
                tasting_notes="Citrus, flint and fresh herbs.",
                food_pairings=["Poke", "Goat cheese"],
                featured=True,
                display_order=1,
            ),
            Wine(
                restaurant_id=restaurant_id,
                name="Etna Rosso",
                producer="Tenuta delle Terre Nere",
                vintage=2021,
                region="Sicily",
                country="Italy",
                grape_varieties=["Nerello Mascalese"],
                type="RED",
                glass_price=Decimal("15.00"),
                bottle_price=Decimal("58.00"),
                tasting_notes="Red cherry, volcanic smoke and bright acidity.",
                food_pairings=["Rotisserie chicken"],
                display_order=2,
            ),
            Wine(
                restaurant_id=restaurant_id,
                name="Cremant de Bourgogne Brut",
                producer="Louis Picamelot",
                region="Burgundy",
                country="France",
                grape_varieties=["Chardonnay", "Pinot Noir"],
                type="SPARKLING",
                bottle_price=Decimal("52.00"),
                inventory_status="LOW_STOCK",
                display_order=3,
            ),
        ]
    )


def _seed_media(session: Session, restaurant_id: int) -> None:
    session.add_all(
        [
            MediaArticle(
                restaurant_id=restaurant_id,
                title="Where to Eat This Month",
                description="A neighbourhood favourite for island comfort food.",
                publish_date=date(2024, 3, 15),
                source="City Food Guide",
                author="Staff",
                link="https://example.com/where-to-eat",
                sort_order=0,
            ),
            MediaArticle(
                restaurant_id=restaurant_id,
                title="Draft: Spring Preview",
                description="Unpublished draft kept for the editors.",
                publish_date=date(2024, 4, 1),
                is_published=False,
                sort_order=1,
            ),
        ]
    )


def ensure_seed_data(session: Session) -> bool:
    """Create the demo tenant once.

    Returns:
        bool: True when data was created by this call.
    """
    existing = session.scalar(select(Restaurant.id).where(Restaurant.slug == settings.restaurant_slug).limit(1))
    if existing is not None:
        logger.info("[BOOTSTRAP] Restaurant %s already seeded", settings.restaurant_slug)
        return False

    restaurant = _seed_restaurant(session)
    _seed_wines(session, restaurant.id)
    _seed_media(session, restaurant.id)
    session.commit()
    logger.info("[BOOTSTRAP] Seeded demo data for %s", settings.restaurant_slug)
    return True
