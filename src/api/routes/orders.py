"""Order API Routes

Buyer-facing checkout.
"""

from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.order_request import CreateOrderRequestSchema
from src.app.services.identity_gateway import ShippingAddressDTO
from src.app.use_cases.orders.dtos import (
    BankInfoDTO,
    CreateOrderCommandDTO,
    CreateOrderResponseDTO,
    LineItemCommandDTO,
)
from src.app.use_cases.orders.create_order import CreateOrder
from src.adapter.repositories.order_repository import SqlAlchemyOrderRepository
from src.adapter.services.catalog_gateway import SqlAlchemyCatalogGateway
from src.adapter.services.identity_gateway import SqlAlchemyIdentityGateway
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_actor_id, get_bank_info
from src.api.error import ClientError

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post(
    "",
    response_model=CreateOrderResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "An item is missing or not approved for sale",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "ITEM_UNAVAILABLE",
                            "message": "Artwork not available: Sunflowers at Dusk"
                        }
                    }
                }
            }
        },
        400: {
            "description": "No items in order",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "EMPTY_ORDER",
                            "message": "No items in order"
                        }
                    }
                }
            }
        }
    }
)
async def create_order(
    request: CreateOrderRequestSchema,
    actor_id: Optional[str] = Depends(get_actor_id),
    bank_info: BankInfoDTO = Depends(get_bank_info),
    session: AsyncSession = Depends(get_session),
):
    """
    Place an order paid by bank transfer.

    The total is the sum of the prices in the request. Every artwork must be
    approved for sale. The response carries the bank account to transfer to.

    **Returns:**
    - 201: Order created with status pending_deposit
    - 400: No items
    - 401: No authenticated buyer
    - 409: An artwork is missing or not approved
    """
    command = CreateOrderCommandDTO(
        actor_id=actor_id,
        items=[
            LineItemCommandDTO(artwork_id=line.artwork_id, price=line.price, item_type=line.type)
            for line in request.items
        ],
        depositor_name=request.depositor_name,
        shipping_address=ShippingAddressDTO(**request.shipping_address.model_dump()),
        save_address=request.save_address,
    )

    use_case = CreateOrder(
        uow=SqlAlchemyUnitOfWork(session),
        order_repo=SqlAlchemyOrderRepository(session),
        catalog_gateway=SqlAlchemyCatalogGateway(session),
        identity_gateway=SqlAlchemyIdentityGateway(session),
        bank_info=bank_info,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
