"""FastAPI dependency injection: container addressing & listing provider."""

from __future__ import annotations

import logging
import re
from typing import AsyncGenerator, Optional

from fastapi import Depends, HTTPException, Query, Request, status
from pydantic import ValidationError

from lakepath.config import settings
from lakepath.schemas.datalake import DataLakeConfig
from lakepath.services import get_provider_factory
from lakepath.services.filters import FilterSpec
from lakepath.services.storage.base import ListingProvider

logger = logging.getLogger(__name__)

_FILTER_PARAM = re.compile(r"^filter\[(?P<field>[^\]]*)\]$")


def get_datalake_config(
    account: Optional[str] = Query(None, description="Storage account name or URL"),
    container: Optional[str] = Query(None, description="Container (file system) name"),
) -> DataLakeConfig:
    """Container from the query string, falling back to configured defaults."""
    try:
        return DataLakeConfig(
            account=account or settings.default_account,
            container=container or settings.default_container,
        )
    except ValidationError as exc:
        missing = ", ".join(str(err["loc"][0]) for err in exc.errors())
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Missing storage location: {missing}",
        )


async def get_provider(
    config: DataLakeConfig = Depends(get_datalake_config),
) -> AsyncGenerator[ListingProvider, None]:
    """Yield a listing provider for the requested container, closed after the request."""
    async with get_provider_factory().create(config) as provider:
        yield provider


def get_filters(request: Request) -> list[FilterSpec]:
    """Parse ``filter[<field>]=<operator>:<value>`` query parameters in order."""
    filters: list[FilterSpec] = []
    for key, value in request.query_params.multi_items():
        match = _FILTER_PARAM.match(key)
        if match:
            filters.append(FilterSpec.parse(match.group("field"), value))
    return filters
