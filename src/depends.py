from typing import Optional
from fastapi import Depends, Header, status
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.database import build_engine, build_session_factory
from src.adapter.services.invoice_delivery_service import create_invoice_delivery_service
from src.adapter.wiring import UseCaseFactory
from src.api.error import ClientError
from src.app.errors import ErrorCode

engine = build_engine(ApplicationConfig.DB_URI)

AsyncSessionLocal = build_session_factory(engine)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Acting user, forwarded by the authenticating gateway"""
    if not x_user_id:
        raise ClientError(
            Error(code=ErrorCode.UNAUTHORIZED, message="Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return x_user_id


async def get_use_cases(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
) -> UseCaseFactory:
    return UseCaseFactory(
        session,
        user_id=user_id,
        delivery_service=create_invoice_delivery_service(ApplicationConfig.INVOICE_DELIVERY_WEBHOOK),
    )
