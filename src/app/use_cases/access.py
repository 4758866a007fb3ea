"""Actor resolution and admin authorization shared by use cases"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.identity_gateway import IdentityGateway, ActorDTO
from .errors import ErrorCode


async def require_actor(identity_gateway: IdentityGateway, actor_id: Optional[str]) -> Result[ActorDTO]:
    actor = await identity_gateway.resolve_actor(actor_id)
    if actor is None:
        return Return.err(
            Error(
                code=ErrorCode.UNAUTHENTICATED,
                message="Authentication required",
                reason="Actor could not be resolved",
            )
        )
    return Return.ok(actor)


async def require_admin(identity_gateway: IdentityGateway, actor_id: Optional[str]) -> Result[ActorDTO]:
    result = await require_actor(identity_gateway, actor_id)
    if result.is_err():
        return result

    if not identity_gateway.is_admin(result.value):
        return Return.err(
            Error(
                code=ErrorCode.FORBIDDEN,
                message="Admin access required",
                reason=f"role={result.value.role}",
            )
        )
    return result
