from typing import Optional
from fastapi import Header
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.notification_service import create_notification_service
from src.app.use_cases.orders.dtos import BankInfoDTO
from src.domain.subscription import BillingCycle


def build_engine(db_uri: str) -> AsyncEngine:
    """
    Create the process-wide async engine

    SQLite transactions start with BEGIN IMMEDIATE so concurrent writers queue
    on the database lock instead of failing a SHARED -> RESERVED upgrade.
    """
    if not db_uri.startswith("sqlite"):
        return create_async_engine(db_uri, echo=False, future=True)

    engine = create_async_engine(
        db_uri, echo=False, future=True, connect_args={"timeout": 15}
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def build_session_factory(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


engine = build_engine(ApplicationConfig.DB_URI)

AsyncSessionLocal = build_session_factory(engine)

notification_service = create_notification_service(ApplicationConfig.DEPOSIT_NOTIFICATION_WEBHOOK)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_notification_service():
    return notification_service


def get_actor_id(x_actor_id: Optional[str] = Header(default=None)) -> Optional[str]:
    """Authenticated user ID forwarded by the auth layer in front of this service"""
    return x_actor_id


def get_bank_info() -> BankInfoDTO:
    return BankInfoDTO(
        bank_name=ApplicationConfig.BANK_NAME,
        account_number=ApplicationConfig.BANK_ACCOUNT_NUMBER,
        account_holder=ApplicationConfig.BANK_ACCOUNT_HOLDER,
    )


def get_billing_cycle() -> BillingCycle:
    return BillingCycle(ApplicationConfig.DEFAULT_BILLING_CYCLE)
