from cfimages.domain.types.base import ApiResponse, BaseInfo


class UsageCountInfo(BaseInfo):
    allowed: int
    current: int


class UsageStatsInfo(BaseInfo):
    count: UsageCountInfo


GetUsageStatsResponse = ApiResponse[UsageStatsInfo]
