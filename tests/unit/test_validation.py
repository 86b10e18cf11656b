"""Unit tests for business-setup validation and coercion.

Tests cover:
- Form-style coercion of numbers, booleans and lists
- Horse, consumable and transaction type rules
- Batch numbering and scope checks
- Normalization defaults
"""
import pytest

from stable_admin.core.validation import (
    normalize_consumable,
    normalize_horse,
    normalize_transaction_type,
    parse_number,
    to_bool,
    to_list,
    to_number,
    validate_consumable,
    validate_horse,
    validate_items,
    validate_scope,
    validate_transaction_type,
)


def consumable(**overrides):
    item = {
        "name": "Timothy Hay",
        "type": "feed",
        "category": "Hay",
        "default_quantity": "1",
        "default_unit_type": "bale",
        "current_stock": "40",
        "minimum_stock": "10",
        "reorder_point": "15",
    }
    item.update(overrides)
    return item


def service(**overrides):
    item = {
        "name": "Full Board",
        "category": "boarding",
        "default_rate": "600",
        "unit_type": "month",
        "billing_frequency": "monthly",
    }
    item.update(overrides)
    return item


# =============================================================================
# Coercion
# =============================================================================


class TestCoercion:
    """Tests for loosely typed form input."""

    def test_numeric_strings_parse(self):
        assert parse_number("12.5") == 12.5
        assert parse_number(" 3 ") == 3.0
        assert parse_number(7) == 7.0

    def test_blank_number_is_none(self):
        assert parse_number("") is None
        assert parse_number(None) is None

    @pytest.mark.parametrize("value", ["abc", "nan", "inf", True])
    def test_junk_numbers_raise(self, value):
        with pytest.raises(ValueError):
            parse_number(value)

    def test_out_of_range_integer_is_not_a_number(self):
        with pytest.raises(ValueError):
            parse_number(10 ** 400)
        assert to_number(10 ** 400, default=0.0) == 0.0

    def test_to_number_falls_back_to_default(self):
        assert to_number("", default=0.0) == 0.0
        assert to_number("oops", default=1.5) == 1.5
        assert to_number("2") == 2.0

    @pytest.mark.parametrize("value,expected", [
        ("true", True), ("on", True), ("1", True), ("TRUE", True),
        ("false", False), ("0", False), ("off", False),
        (True, True), (False, False),
    ])
    def test_to_bool_form_spellings(self, value, expected):
        assert to_bool(value) is expected

    def test_to_bool_none_uses_default(self):
        assert to_bool(None, default=True) is True
        assert to_bool(None) is False

    def test_to_list_splits_comma_separated_input(self):
        assert to_list("hay, oats ,") == ["hay", "oats"]
        assert to_list(["a"]) == ["a"]
        assert to_list(None) == []
        assert to_list("") == []


# =============================================================================
# Horses
# =============================================================================


class TestHorseRules:
    """Tests for validate_horse."""

    def test_valid_horse(self):
        assert validate_horse({"name": "Bella", "breed": "Arabian", "gender": "mare"}, 1) == []

    def test_missing_fields_are_reported_in_order(self):
        errors = validate_horse({}, 2)

        assert errors == [
            "Horse 2: Name is required",
            "Horse 2: Breed is required",
            "Horse 2: Gender is required",
        ]

    def test_unknown_gender_rejected(self):
        errors = validate_horse({"name": "Bella", "breed": "Arabian", "gender": "unicorn"}, 1)

        assert len(errors) == 1
        assert errors[0].startswith("Horse 1: Gender must be one of")

    def test_height_must_be_numeric_and_positive(self):
        base = {"name": "Bella", "breed": "Arabian", "gender": "mare"}

        assert validate_horse({**base, "height_hands": "tall"}, 1) == ["Horse 1: Height must be a number"]
        assert validate_horse({**base, "height_hands": "0"}, 1) == ["Horse 1: Height must be positive"]
        assert validate_horse({**base, "height_hands": ""}, 1) == []

    def test_list_fields_must_hold_text(self):
        base = {"name": "Bella", "breed": "Arabian", "gender": "mare"}

        assert validate_horse({**base, "dietary_restrictions": [1, 2]}, 1) == [
            "Horse 1: Dietary restrictions must be a list of text values"
        ]
        assert validate_horse({**base, "photos": {"front": "a.jpg"}}, 1) == [
            "Horse 1: Photos must be a list of text values"
        ]
        assert validate_horse({**base, "dietary_restrictions": "no sugar, no alfalfa"}, 1) == []
        assert validate_horse({**base, "photos": ["a.jpg", "b.jpg"]}, 1) == []

    def test_required_text_fields_reject_lists_and_objects(self):
        errors = validate_horse({"name": ["x"], "breed": {"value": "Arabian"}, "gender": "mare"}, 1)

        assert errors == [
            "Horse 1: Name must be a single value",
            "Horse 1: Breed must be a single value",
        ]

    def test_normalize_applies_defaults(self):
        horse = normalize_horse({"name": "Bella", "breed": "Arabian", "gender": "mare"}, None, "org-1")

        assert horse.photos == []
        assert horse.dietary_restrictions == []
        assert horse.insurance_details == {}
        assert horse.is_active is True
        assert horse.status == "active"
        assert horse.organization_id == "org-1"
        assert horse.user_id is None

    def test_normalize_coerces_numbers(self):
        horse = normalize_horse(
            {"name": "Bella", "breed": "Arabian", "gender": "mare", "height_hands": "15.2", "weight_kg": ""},
            "user-1",
            None
        )

        assert horse.height_hands == 15.2
        assert horse.weight_kg is None


# =============================================================================
# Consumables
# =============================================================================


class TestConsumableRules:
    """Tests for validate_consumable."""

    def test_valid_consumable(self):
        assert validate_consumable(consumable(), 1) == []

    def test_negative_stock_gets_field_specific_message(self):
        errors = validate_consumable(consumable(current_stock="-1"), 1)

        assert errors == ["Consumable 1: Current stock must be non-negative"]

    def test_missing_stock_counts_as_invalid(self):
        item = consumable()
        del item["minimum_stock"]

        assert validate_consumable(item, 3) == ["Consumable 3: Minimum stock must be non-negative"]

    def test_negative_reorder_point_rejected(self):
        errors = validate_consumable(consumable(reorder_point=-1), 1)

        assert errors == ["Consumable 1: Reorder point must be non-negative"]

    def test_oversized_quantity_is_not_a_number(self):
        errors = validate_consumable(consumable(default_quantity=10 ** 400), 1)

        assert errors == ["Consumable 1: Default quantity must be a number"]

    def test_zero_default_quantity_rejected(self):
        errors = validate_consumable(consumable(default_quantity="0"), 1)

        assert errors == ["Consumable 1: Default quantity must be greater than 0"]

    def test_zero_stock_is_allowed(self):
        assert validate_consumable(consumable(current_stock="0", reorder_point=0), 1) == []

    def test_missing_unit_type(self):
        errors = validate_consumable(consumable(default_unit_type=""), 1)

        assert errors == ["Consumable 1: Unit type is required"]

    def test_normalize_defaults(self):
        item = normalize_consumable(consumable(), "user-1", None)

        assert item.cost_per_unit == 0.0
        assert item.is_active is True
        assert item.requires_prescription is False
        assert item.withdrawal_period_days == 0
        assert item.current_stock == 40.0


# =============================================================================
# Service pricing
# =============================================================================


class TestTransactionTypeRules:
    """Tests for validate_transaction_type."""

    def test_valid_service(self):
        assert validate_transaction_type(service(), 1) == []

    def test_min_greater_than_max_rejected(self):
        errors = validate_transaction_type(service(price_range_min="100", price_range_max="50"), 1)

        assert errors == ["Transaction type 1: Price range min cannot be greater than max"]

    def test_zero_bounds_are_given_values(self):
        errors = validate_transaction_type(service(price_range_min="10", price_range_max="0"), 1)

        assert errors == ["Transaction type 1: Price range min cannot be greater than max"]

    def test_negative_rate_rejected(self):
        errors = validate_transaction_type(service(default_rate="-5"), 2)

        assert errors == ["Transaction type 2: Default rate must be non-negative"]

    def test_required_fields(self):
        errors = validate_transaction_type({"default_rate": 10}, 1)

        assert "Transaction type 1: Name is required" in errors
        assert "Transaction type 1: Category is required" in errors
        assert "Transaction type 1: Unit type is required" in errors
        assert "Transaction type 1: Billing frequency is required" in errors

    def test_normalize_defaults(self):
        item = normalize_transaction_type(service(), "org-1")

        assert item.service_tier == "standard"
        assert item.is_active is True
        assert item.billing_cycle_days == 0
        assert item.price_range_min is None
        assert item.default_rate == 600.0


# =============================================================================
# Batches
# =============================================================================


class TestBatchChecks:
    """Tests for batch-level validation."""

    def test_scope_requires_owner(self):
        assert validate_scope(None, "", [{}], "Horses") == ["user_id or organization_id must be provided"]

    def test_scope_requires_items(self):
        assert validate_scope("user-1", None, [], "Horses") == ["Horses array cannot be empty"]

    def test_items_are_numbered_from_one(self):
        errors = validate_items([consumable(), consumable(name="")], validate_consumable)

        assert errors == ["Consumable 2: Name is required"]

    def test_non_object_items_are_reported(self):
        errors = validate_items(["hay"], validate_consumable)

        assert errors == ["Item 1: must be an object"]
