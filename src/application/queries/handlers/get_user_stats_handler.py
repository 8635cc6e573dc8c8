"""Get user stats query handler.

Statistics cover every credential of the requesting key's owner, so an
end-user seen through several of the owner's apps is reported as one.
"""

from src.application.dtos.analytics_dtos import UserStatsResult
from src.application.queries.analytics_queries import GetUserStats
from src.application.services.aggregation_engine import AggregationEngine
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.protocols.api_key_repository import ApiKeyRepository


class GetUserStatsHandler:
    """Handler for GetUserStats query."""

    def __init__(
        self,
        api_key_repo: ApiKeyRepository,
        aggregation_engine: AggregationEngine,
    ) -> None:
        self._api_key_repo = api_key_repo
        self._aggregation_engine = aggregation_engine

    async def handle(self, query: GetUserStats) -> Result[UserStatsResult, DomainError]:
        """Handle GetUserStats query.

        Returns:
            Success(UserStatsResult), zero-valued for an unseen end-user.
            Failure(NotFoundError) if the tenant has no credentials.
        """
        api_key = await self._api_key_repo.find_by_id(query.api_key_id)
        api_key_ids = (
            await self._api_key_repo.find_ids_by_user(api_key.user_id)
            if api_key is not None
            else []
        )
        if not api_key_ids:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.CREDENTIALS_NOT_FOUND,
                    message="No API keys found for this account",
                    resource_type="ApiKey",
                    resource_id=str(query.api_key_id),
                )
            )

        stats = await self._aggregation_engine.user_stats(
            tracking_user_id=query.tracking_user_id,
            api_key_ids=api_key_ids,
        )
        return Success(value=UserStatsResult(stats=stats))
