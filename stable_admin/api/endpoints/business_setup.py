"""
Business Setup Endpoints

Batch creation of horses, consumables and service prices for a user or an
organization. A batch is validated item by item first; if any item fails
nothing is written and every message is returned.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from stable_admin.core.exceptions import ValidationError
from stable_admin.core.validation import (
    is_blank,
    normalize_consumable,
    normalize_horse,
    normalize_transaction_type,
    validate_consumable,
    validate_horse,
    validate_items,
    validate_scope,
    validate_transaction_type,
)
from stable_admin.database import get_db, commit_or_raise
from stable_admin.models.consumable import Consumable
from stable_admin.models.horse import Horse
from stable_admin.models.transaction_type import TransactionType
from stable_admin.schemas.business_setup import (
    BusinessSetupResponse,
    ConsumableListResponse,
    ConsumableResponse,
    ConsumableSetupRequest,
    HorseListResponse,
    HorseResponse,
    HorseSetupRequest,
    ServicePricingSetupRequest,
    ServiceTemplateCatalog,
    TransactionTypeListResponse,
    TransactionTypeResponse,
)
from stable_admin.services.service_templates import templates_for
from stable_admin.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/business-setup", tags=["business-setup"])


def _check_batch(
    user_id: Optional[str],
    organization_id: Optional[str],
    items: List,
    noun: str,
    owner_message: str,
    empty_message: str
) -> None:
    """Reject a batch without an owner or without items."""
    errors = validate_scope(user_id, organization_id, items, noun)
    if errors:
        message = owner_message if is_blank(user_id) and is_blank(organization_id) else empty_message
        raise ValidationError(errors, message=message)


def _check_items(items: List, rule) -> None:
    errors = validate_items(items, rule)
    if errors:
        raise ValidationError(errors)


# ============================================================================
# HORSES
# ============================================================================

@router.post("/horses", response_model=BusinessSetupResponse, status_code=status.HTTP_201_CREATED)
async def create_horses(
    batch: HorseSetupRequest,
    db: Session = Depends(get_db)
):
    """
    Create a batch of horses.

    Optional fields get defaults: status active, empty photo and diet
    lists, empty insurance details.
    """
    _check_batch(batch.user_id, batch.organization_id, batch.horses, "Horses",
                 "User ID or Organization ID is required", "At least one horse is required")
    _check_items(batch.horses, validate_horse)

    horses = [
        Horse(**normalize_horse(item, batch.user_id, batch.organization_id).model_dump())
        for item in batch.horses
    ]
    db.add_all(horses)
    commit_or_raise(db, "create horses")

    logger.info(
        f"Created {len(horses)} horses",
        extra={"organization_id": batch.organization_id, "user_id": batch.user_id}
    )
    return BusinessSetupResponse(
        success=True,
        message=f"Successfully added {len(horses)} horses",
        data={"horses_created": len(horses)}
    )


@router.get("/horses/existing", response_model=HorseListResponse)
async def list_existing_horses(
    user_id: Optional[str] = Query(None),
    organization_id: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """Active horses of an organization, or of a user when no organization is given."""
    query = db.query(Horse).filter(Horse.is_active == True)  # noqa: E712
    if organization_id:
        query = query.filter(Horse.organization_id == organization_id)
    elif user_id:
        query = query.filter(Horse.user_id == user_id)
    else:
        raise ValidationError(
            ["user_id or organization_id must be provided"],
            message="Either user_id or organization_id is required"
        )

    horses = query.order_by(Horse.created_at.desc()).all()
    return HorseListResponse(
        horses=[HorseResponse.model_validate(horse) for horse in horses],
        count=len(horses)
    )


# ============================================================================
# CONSUMABLES
# ============================================================================

@router.post("/consumables", response_model=BusinessSetupResponse, status_code=status.HTTP_201_CREATED)
async def create_consumables(
    batch: ConsumableSetupRequest,
    db: Session = Depends(get_db)
):
    """Create a batch of feed, medicine, equipment and other supplies."""
    _check_batch(batch.user_id, batch.organization_id, batch.consumables, "Consumables",
                 "User ID or Organization ID is required", "At least one consumable is required")
    _check_items(batch.consumables, validate_consumable)

    consumables = [
        Consumable(**normalize_consumable(item, batch.user_id, batch.organization_id).model_dump())
        for item in batch.consumables
    ]
    db.add_all(consumables)
    commit_or_raise(db, "create consumables")

    logger.info(
        f"Created {len(consumables)} consumables",
        extra={"organization_id": batch.organization_id, "user_id": batch.user_id}
    )
    return BusinessSetupResponse(
        success=True,
        message=f"Successfully added {len(consumables)} consumables",
        data={"consumables_created": len(consumables)}
    )


@router.get("/consumables/existing", response_model=ConsumableListResponse)
async def list_existing_consumables(
    user_id: Optional[str] = Query(None),
    organization_id: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    query = db.query(Consumable).filter(Consumable.is_active == True)  # noqa: E712
    if organization_id:
        query = query.filter(Consumable.organization_id == organization_id)
    elif user_id:
        query = query.filter(Consumable.user_id == user_id)
    else:
        raise ValidationError(
            ["user_id or organization_id must be provided"],
            message="Either user_id or organization_id is required"
        )

    consumables = query.order_by(Consumable.type.asc(), Consumable.name.asc()).all()
    return ConsumableListResponse(
        consumables=[ConsumableResponse.model_validate(c) for c in consumables],
        count=len(consumables)
    )


# ============================================================================
# SERVICE PRICING
# ============================================================================

@router.post("/service-pricing", response_model=BusinessSetupResponse, status_code=status.HTTP_201_CREATED)
async def create_service_pricing(
    batch: ServicePricingSetupRequest,
    db: Session = Depends(get_db)
):
    """
    Create a batch of transaction types (billable services).

    Service prices always belong to an organization.
    """
    if is_blank(batch.organization_id):
        raise ValidationError(["organization_id must be provided"], message="Organization ID is required")
    _check_batch(None, batch.organization_id, batch.transaction_types, "Transaction types",
                 "Organization ID is required", "At least one transaction type is required")
    _check_items(batch.transaction_types, validate_transaction_type)

    transaction_types = [
        TransactionType(**normalize_transaction_type(item, batch.organization_id).model_dump())
        for item in batch.transaction_types
    ]
    db.add_all(transaction_types)
    commit_or_raise(db, "create transaction types")

    logger.info(
        f"Created {len(transaction_types)} transaction types",
        extra={"organization_id": batch.organization_id}
    )
    return BusinessSetupResponse(
        success=True,
        message=f"Successfully added {len(transaction_types)} transaction types",
        data={"transaction_types_created": len(transaction_types)}
    )


@router.get("/service-pricing/existing", response_model=TransactionTypeListResponse)
async def list_existing_service_pricing(
    organization_id: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    if not organization_id:
        raise ValidationError(["organization_id must be provided"], message="Organization ID is required")

    transaction_types = db.query(TransactionType).filter(
        TransactionType.organization_id == organization_id
    ).order_by(TransactionType.category.asc(), TransactionType.name.asc()).all()

    return TransactionTypeListResponse(
        transaction_types=[TransactionTypeResponse.model_validate(t) for t in transaction_types],
        count=len(transaction_types)
    )


@router.get("/service-pricing/templates", response_model=ServiceTemplateCatalog)
async def list_service_templates(category: Optional[str] = Query(None)):
    """Starter services per category, optionally for a single category."""
    return ServiceTemplateCatalog(templates=templates_for(category))
