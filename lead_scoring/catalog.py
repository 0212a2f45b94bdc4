"""
Fixed catalogs for Booth Leads.

Brands, product categories, business types, contact methods, booth sections
and salespeople selectable on the intake form. Catalogs are closed enums so
that bucket initialization can iterate every member.
"""

from enum import Enum
from typing import Dict, Iterable, List, Type


class Brand(str, Enum):
    """Brands shown at the booth."""
    BERI = "beri"
    RAZ = "raz"
    LOST_MARY = "lost-mary"
    DINNER_LADY = "dinner-lady"
    ONE_TANK = "one-tank"
    RYL = "ryl"

    @property
    def display_name(self) -> str:
        return BRAND_NAMES[self]


class Category(str, Enum):
    """Product categories."""
    VAPES = "vapes"
    DEVICES = "devices"
    VAPE_JUICE = "vape-juice"
    SMOKE_SHOP = "smoke-shop"
    HEMP = "hemp"
    CONVENIENCE = "convenience"

    @property
    def display_name(self) -> str:
        return CATEGORY_NAMES[self]

    @property
    def description(self) -> str:
        return CATEGORY_DESCRIPTIONS[self]


class BusinessType(str, Enum):
    """Visitor business type."""
    WHOLESALE = "wholesale"
    RETAIL = "retail"
    UNSET = ""


class ContactMethod(str, Enum):
    """Preferred follow-up channel."""
    EMAIL = "email"
    PHONE = "phone"
    TEXT = "text"
    ALL = "all"
    UNSET = ""


class BoothSection(str, Enum):
    """Booth display zones."""
    BERI_DISPLAY = "beri-display"
    DINNER_LADY_DISPLAY = "dinner-lady-display"
    LOST_MARY_DISPLAY = "lost-mary-display"
    ONE_TANK_DISPLAY = "one-tank-display"
    RAZ_DISPLAY = "raz-display"
    RYL_DISPLAY = "ryl-display"

    @property
    def display_name(self) -> str:
        return BOOTH_SECTION_NAMES[self]


BRAND_NAMES: Dict[Brand, str] = {
    Brand.BERI: "Beri",
    Brand.RAZ: "Raz",
    Brand.LOST_MARY: "Lost Mary",
    Brand.DINNER_LADY: "Dinner Lady",
    Brand.ONE_TANK: "One Tank",
    Brand.RYL: "RYL",
}

CATEGORY_NAMES: Dict[Category, str] = {
    Category.VAPES: "Vapes",
    Category.DEVICES: "Devices",
    Category.VAPE_JUICE: "Vape Juice",
    Category.SMOKE_SHOP: "Smoke Shop Items",
    Category.HEMP: "Hemp Products",
    Category.CONVENIENCE: "Convenience Store Items",
}

CATEGORY_DESCRIPTIONS: Dict[Category, str] = {
    Category.VAPES: "Disposable and rechargeable vape devices",
    Category.DEVICES: "Mods, pods, and starter kits",
    Category.VAPE_JUICE: "E-liquids and nicotine salts",
    Category.SMOKE_SHOP: "Papers, pipes, and accessories",
    Category.HEMP: "CBD, Delta-8, and hemp extracts",
    Category.CONVENIENCE: "Snacks, drinks, and essentials",
}

CONTACT_METHOD_NAMES: Dict[ContactMethod, str] = {
    ContactMethod.EMAIL: "Email",
    ContactMethod.PHONE: "Phone",
    ContactMethod.TEXT: "Text",
    ContactMethod.ALL: "Any",
}

BOOTH_SECTION_NAMES: Dict[BoothSection, str] = {
    BoothSection.BERI_DISPLAY: "Beri Display",
    BoothSection.DINNER_LADY_DISPLAY: "Dinner Lady Display",
    BoothSection.LOST_MARY_DISPLAY: "Lost Mary Display",
    BoothSection.ONE_TANK_DISPLAY: "One Tank Display",
    BoothSection.RAZ_DISPLAY: "Raz Display",
    BoothSection.RYL_DISPLAY: "RYL Display",
}

SALESPEOPLE: Dict[str, str] = {
    "amanda": "Amanda",
    "bella": "Bella",
    "brandon": "Brandon",
    "dani": "Dani",
    "james": "James",
    "tisha": "Tisha",
}


def display_names(ids: Iterable[str], catalog: Type[Enum]) -> List[str]:
    """
    Resolve catalog display names for the given identifiers.

    Names come back in catalog order; identifiers that are not part of the
    catalog are skipped.
    """
    selected = set(ids)
    return [member.display_name for member in catalog if member.value in selected]


def salesperson_name(salesperson_id: str) -> str:
    """Display name for a salesperson id, falling back to the raw id."""
    return SALESPEOPLE.get(salesperson_id, salesperson_id or "")


def booth_section_name(section_id: str) -> str:
    """Display name for a booth section id, falling back to the raw id."""
    try:
        return BoothSection(section_id).display_name
    except ValueError:
        return section_id or ""
