"""
Service Pricing Templates

Starter services offered per transaction category when an organization
sets up its price list. Rates are suggestions in the organization's
currency; clients copy them into a service-pricing batch and edit freely.
"""
from typing import Dict, List, Optional

from stable_admin.models.transaction_type import TransactionCategory


def _service(name, rate, unit_type, billing_frequency, tier, recurring=False):
    return {
        "name": name,
        "default_rate": rate,
        "unit_type": unit_type,
        "billing_frequency": billing_frequency,
        "service_tier": tier,
        "is_recurring": recurring,
    }


SERVICE_TEMPLATES: Dict[str, List[dict]] = {
    TransactionCategory.TRAINING.value: [
        _service("Basic Training Session", 75, "hour", "session", "standard"),
        _service("Advanced Training Session", 100, "hour", "session", "premium"),
        _service("Group Training Session", 50, "hour", "session", "basic"),
        _service("Competition Preparation", 125, "hour", "session", "premium"),
    ],
    TransactionCategory.BOARDING.value: [
        _service("Full Board", 600, "month", "monthly", "standard", recurring=True),
        _service("Pasture Board", 300, "month", "monthly", "basic", recurring=True),
        _service("Training Board", 1200, "month", "monthly", "premium", recurring=True),
    ],
    TransactionCategory.GROOMING.value: [
        _service("Basic Grooming", 35, "session", "session", "basic"),
        _service("Full Grooming Service", 60, "session", "session", "standard"),
        _service("Show Preparation", 100, "session", "session", "premium"),
    ],
    TransactionCategory.VETERINARY.value: [
        _service("Routine Check-up", 150, "event", "per_event", "standard"),
        _service("Emergency Call", 300, "event", "per_event", "standard"),
        _service("Vaccination", 75, "event", "per_event", "basic"),
    ],
    TransactionCategory.FARRIER.value: [
        _service("Trim Only", 45, "event", "per_event", "basic"),
        _service("Shoe (4 shoes)", 120, "event", "per_event", "standard"),
        _service("Corrective Shoeing", 180, "event", "per_event", "premium"),
    ],
    TransactionCategory.FEED.value: [
        _service("Hay (per bale)", 12, "fixed", "per_event", "basic"),
        _service("Grain (per bag)", 25, "fixed", "per_event", "basic"),
        _service("Supplements", 50, "month", "monthly", "standard"),
    ],
    TransactionCategory.MEDICINE.value: [
        _service("Deworming", 25, "event", "per_event", "basic"),
        _service("Joint Injection", 200, "event", "per_event", "premium"),
        _service("Medication Administration", 15, "task", "per_task", "basic"),
    ],
    TransactionCategory.TRANSPORTATION.value: [
        _service("Local Transport", 2, "fixed", "per_event", "standard"),
        _service("Long Distance Transport", 5, "fixed", "per_event", "standard"),
        _service("Emergency Transport", 10, "fixed", "per_event", "premium"),
    ],
    TransactionCategory.OTHER.value: [
        _service("General Service", 50, "hour", "session", "standard"),
    ],
}


def templates_for(category: Optional[str] = None) -> Dict[str, List[dict]]:
    """
    Return templates for one category, or all of them.

    An unknown category yields an empty mapping.
    """
    if category is None:
        return {key: [dict(t) for t in value] for key, value in SERVICE_TEMPLATES.items()}
    if category not in SERVICE_TEMPLATES:
        return {}
    return {category: [dict(t) for t in SERVICE_TEMPLATES[category]]}
