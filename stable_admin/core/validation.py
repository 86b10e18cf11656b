"""
Payload Validation and Coercion

One module holds every business-setup rule. Rule functions take the raw
payload (as submitted by a form, so numbers may arrive as strings) and
return an ordered list of messages; an empty list means valid. The
normalize_* functions then coerce a valid payload into the typed create
schema, filling defaults for absent optional fields.

Messages are numbered from 1 in submission order, e.g.
"Consumable 2: Minimum stock must be non-negative".
"""
from typing import Any, Dict, List, Optional, Sequence

from stable_admin.models.consumable import ConsumableType
from stable_admin.models.horse import HorseGender, HorseStatus
from stable_admin.models.transaction_type import BillingFrequency, TransactionCategory, UnitType
from stable_admin.schemas.business_setup import ConsumableCreate, HorseCreate, TransactionTypeCreate

TRUE_STRINGS = {"true", "1", "yes", "on", "t", "y"}
FALSE_STRINGS = {"false", "0", "no", "off", "f", "n", ""}

HORSE_GENDERS = {g.value for g in HorseGender}
HORSE_STATUSES = {s.value for s in HorseStatus}
CONSUMABLE_TYPES = {t.value for t in ConsumableType}
TRANSACTION_CATEGORIES = {c.value for c in TransactionCategory}
UNIT_TYPES = {u.value for u in UnitType}
BILLING_FREQUENCIES = {f.value for f in BillingFrequency}


# ============================================================================
# COERCION
# ============================================================================

def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict)):
        return not value
    return False


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a loosely typed number.

    Returns None for missing or blank input and raises ValueError for
    anything that is not a finite number.
    """
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise ValueError(f"not a number: {value!r}")
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except OverflowError:
        raise ValueError(f"number out of range: {value!r}")
    if number != number or number in (float("inf"), float("-inf")):
        raise ValueError(f"not a finite number: {value!r}")
    return number


def to_number(value: Any, default: Optional[float] = None) -> Optional[float]:
    """Coerce to float, substituting default for blank or unparsable input."""
    try:
        number = parse_number(value)
    except (TypeError, ValueError):
        return default
    return default if number is None else number


def to_int(value: Any, default: int = 0) -> int:
    number = to_number(value)
    return default if number is None else int(number)


def to_bool(value: Any, default: bool = False) -> bool:
    """
    Coerce form-style booleans.

    Strings are matched case-insensitively against the usual spellings
    ("true"/"false", "on"/"off", "1"/"0"); None falls back to default.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
        return default
    return bool(value)


def to_list(value: Any) -> List[Any]:
    if is_blank(value):
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        # comma separated form input
        return [item.strip() for item in value.split(",") if item.strip()]
    return [value]


def to_dict(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, dict) else {}


def to_text(value: Any) -> Optional[str]:
    if is_blank(value):
        return None
    return str(value).strip()


# ============================================================================
# RULE HELPERS
# ============================================================================

def _require(errors: List[str], prefix: str, item: Dict[str, Any], field: str, label: str) -> None:
    value = item.get(field)
    if is_blank(value):
        errors.append(f"{prefix}: {label} is required")
    elif isinstance(value, (list, dict)):
        errors.append(f"{prefix}: {label} must be a single value")


def _check_text_list(errors: List[str], prefix: str, value: Any, label: str) -> None:
    """A list field accepts a comma separated string or a list of strings."""
    if is_blank(value) or isinstance(value, str):
        return
    if not isinstance(value, (list, tuple)) or not all(isinstance(entry, str) for entry in value):
        errors.append(f"{prefix}: {label} must be a list of text values")


def _check_number(
    errors: List[str],
    prefix: str,
    value: Any,
    label: str,
    message: str,
    minimum: float = 0,
    strict: bool = False,
    required: bool = True
) -> Optional[float]:
    """Append message when value is missing (if required), unparsable or below minimum."""
    try:
        number = parse_number(value)
    except (TypeError, ValueError):
        errors.append(f"{prefix}: {label} must be a number")
        return None
    if number is None:
        if required:
            errors.append(f"{prefix}: {message}")
        return None
    if number < minimum or (strict and number == minimum):
        errors.append(f"{prefix}: {message}")
    return number


def _check_choice(errors: List[str], prefix: str, value: Any, label: str, choices: set) -> None:
    if is_blank(value):
        return
    if not isinstance(value, str) or value not in choices:
        errors.append(f"{prefix}: {label} must be one of {', '.join(sorted(choices))}")


def validate_scope(user_id: Optional[str], organization_id: Optional[str], items: Sequence[Any], noun: str) -> List[str]:
    """Batch-level checks shared by horse and consumable setup."""
    errors = []
    if is_blank(user_id) and is_blank(organization_id):
        errors.append("user_id or organization_id must be provided")
    if not items:
        errors.append(f"{noun} array cannot be empty")
    return errors


# ============================================================================
# ENTITY RULES
# ============================================================================

def validate_horse(horse: Dict[str, Any], position: int) -> List[str]:
    prefix = f"Horse {position}"
    errors: List[str] = []
    _require(errors, prefix, horse, "name", "Name")
    _require(errors, prefix, horse, "breed", "Breed")
    _require(errors, prefix, horse, "gender", "Gender")
    _check_choice(errors, prefix, horse.get("gender"), "Gender", HORSE_GENDERS)
    _check_choice(errors, prefix, horse.get("status"), "Status", HORSE_STATUSES)
    _check_number(errors, prefix, horse.get("height_hands"), "Height", "Height must be positive",
                  strict=True, required=False)
    _check_number(errors, prefix, horse.get("weight_kg"), "Weight", "Weight must be positive",
                  strict=True, required=False)
    _check_text_list(errors, prefix, horse.get("dietary_restrictions"), "Dietary restrictions")
    _check_text_list(errors, prefix, horse.get("photos"), "Photos")
    return errors


def validate_consumable(consumable: Dict[str, Any], position: int) -> List[str]:
    prefix = f"Consumable {position}"
    errors: List[str] = []
    _require(errors, prefix, consumable, "name", "Name")
    _require(errors, prefix, consumable, "type", "Type")
    _check_choice(errors, prefix, consumable.get("type"), "Type", CONSUMABLE_TYPES)
    _require(errors, prefix, consumable, "category", "Category")
    _check_number(errors, prefix, consumable.get("default_quantity"), "Default quantity",
                  "Default quantity must be greater than 0", strict=True)
    _require(errors, prefix, consumable, "default_unit_type", "Unit type")
    _check_number(errors, prefix, consumable.get("current_stock"), "Current stock",
                  "Current stock must be non-negative")
    _check_number(errors, prefix, consumable.get("minimum_stock"), "Minimum stock",
                  "Minimum stock must be non-negative")
    _check_number(errors, prefix, consumable.get("reorder_point"), "Reorder point",
                  "Reorder point must be non-negative")
    _check_number(errors, prefix, consumable.get("cost_per_unit"), "Cost per unit",
                  "Cost per unit must be non-negative", required=False)
    _check_number(errors, prefix, consumable.get("withdrawal_period_days"), "Withdrawal period",
                  "Withdrawal period must be non-negative", required=False)
    return errors


def validate_transaction_type(transaction_type: Dict[str, Any], position: int) -> List[str]:
    prefix = f"Transaction type {position}"
    errors: List[str] = []
    _require(errors, prefix, transaction_type, "name", "Name")
    _require(errors, prefix, transaction_type, "category", "Category")
    _check_choice(errors, prefix, transaction_type.get("category"), "Category", TRANSACTION_CATEGORIES)
    _require(errors, prefix, transaction_type, "unit_type", "Unit type")
    _check_choice(errors, prefix, transaction_type.get("unit_type"), "Unit type", UNIT_TYPES)
    _require(errors, prefix, transaction_type, "billing_frequency", "Billing frequency")
    _check_choice(errors, prefix, transaction_type.get("billing_frequency"), "Billing frequency",
                  BILLING_FREQUENCIES)
    _check_number(errors, prefix, transaction_type.get("default_rate"), "Default rate",
                  "Default rate must be non-negative")
    low = _check_number(errors, prefix, transaction_type.get("price_range_min"), "Price range min",
                        "Price range min must be non-negative", required=False)
    high = _check_number(errors, prefix, transaction_type.get("price_range_max"), "Price range max",
                         "Price range max must be non-negative", required=False)
    if low is not None and high is not None and low > high:
        errors.append(f"{prefix}: Price range min cannot be greater than max")
    return errors


def validate_items(items: Sequence[Dict[str, Any]], rule) -> List[str]:
    """Run a per-item rule over a batch, numbering items from 1."""
    errors: List[str] = []
    for position, item in enumerate(items, start=1):
        if not isinstance(item, dict):
            errors.append(f"Item {position}: must be an object")
            continue
        errors.extend(rule(item, position))
    return errors


# ============================================================================
# NORMALIZATION
# ============================================================================

def normalize_horse(horse: Dict[str, Any], user_id: Optional[str], organization_id: Optional[str]) -> HorseCreate:
    return HorseCreate(
        user_id=to_text(user_id),
        organization_id=to_text(organization_id),
        name=to_text(horse.get("name")),
        registered_name=to_text(horse.get("registered_name")),
        nickname=to_text(horse.get("nickname")),
        breed=to_text(horse.get("breed")),
        gender=horse.get("gender"),
        birth_date=to_text(horse.get("birth_date")),
        color=to_text(horse.get("color")),
        markings=to_text(horse.get("markings")),
        registration_number=to_text(horse.get("registration_number")),
        microchip_number=to_text(horse.get("microchip_number")),
        passport_number=to_text(horse.get("passport_number")),
        height_hands=to_number(horse.get("height_hands")),
        weight_kg=to_number(horse.get("weight_kg")),
        status=to_text(horse.get("status")) or HorseStatus.ACTIVE.value,
        location=to_text(horse.get("location")),
        owner_name=to_text(horse.get("owner_name")),
        owner_contact=to_text(horse.get("owner_contact")),
        insurance_details=to_dict(horse.get("insurance_details")),
        medical_notes=to_text(horse.get("medical_notes")),
        dietary_restrictions=to_list(horse.get("dietary_restrictions")),
        photos=to_list(horse.get("photos")),
        is_active=to_bool(horse.get("is_active"), default=True),
    )


def normalize_consumable(consumable: Dict[str, Any], user_id: Optional[str], organization_id: Optional[str]) -> ConsumableCreate:
    return ConsumableCreate(
        user_id=to_text(user_id),
        organization_id=to_text(organization_id),
        name=to_text(consumable.get("name")),
        type=consumable.get("type"),
        category=to_text(consumable.get("category")),
        brand=to_text(consumable.get("brand")),
        specifications=to_dict(consumable.get("specifications")),
        default_quantity=to_number(consumable.get("default_quantity")),
        default_unit_type=to_text(consumable.get("default_unit_type")),
        cost_per_unit=to_number(consumable.get("cost_per_unit"), default=0.0),
        supplier=to_text(consumable.get("supplier")),
        current_stock=to_number(consumable.get("current_stock")),
        minimum_stock=to_number(consumable.get("minimum_stock")),
        reorder_point=to_number(consumable.get("reorder_point")),
        is_active=to_bool(consumable.get("is_active"), default=True),
        is_default=to_bool(consumable.get("is_default")),
        requires_prescription=to_bool(consumable.get("requires_prescription")),
        withdrawal_period_days=to_int(consumable.get("withdrawal_period_days")),
        barcode=to_text(consumable.get("barcode")),
        sku=to_text(consumable.get("sku")),
        storage_requirements=to_text(consumable.get("storage_requirements")),
        expiry_date=to_text(consumable.get("expiry_date")),
    )


def normalize_transaction_type(transaction_type: Dict[str, Any], organization_id: str) -> TransactionTypeCreate:
    return TransactionTypeCreate(
        organization_id=organization_id,
        name=to_text(transaction_type.get("name")),
        description=to_text(transaction_type.get("description")),
        category=transaction_type.get("category"),
        default_rate=to_number(transaction_type.get("default_rate")),
        unit_type=transaction_type.get("unit_type"),
        billing_frequency=transaction_type.get("billing_frequency"),
        price_range_min=to_number(transaction_type.get("price_range_min")),
        price_range_max=to_number(transaction_type.get("price_range_max")),
        market_reference=to_text(transaction_type.get("market_reference")),
        service_tier=to_text(transaction_type.get("service_tier")) or "standard",
        is_system_default=to_bool(transaction_type.get("is_system_default")),
        is_active=to_bool(transaction_type.get("is_active"), default=True),
        is_recurring=to_bool(transaction_type.get("is_recurring")),
        auto_billing_enabled=to_bool(transaction_type.get("auto_billing_enabled")),
        requires_approval=to_bool(transaction_type.get("requires_approval")),
        billing_cycle_days=to_int(transaction_type.get("billing_cycle_days")),
        max_tasks_per_cycle=to_int(transaction_type.get("max_tasks_per_cycle")),
    )
