"""Dependencies for FastAPI routes."""

from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from moneycookie.core.constants import APIConstants
from moneycookie.db.session import get_db

DBSession = Annotated[AsyncSession, Depends(get_db)]


class Pagination:
    """Skip/limit query parameters shared by list endpoints."""

    def __init__(
        self,
        skip: Annotated[int, Query(ge=0)] = 0,
        limit: Annotated[
            int, Query(ge=1, le=APIConstants.MAX_PAGE_SIZE)
        ] = APIConstants.DEFAULT_PAGE_SIZE,
    ) -> None:
        self.skip = skip
        self.limit = limit


PageParams = Annotated[Pagination, Depends()]
