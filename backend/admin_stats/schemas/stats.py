from pydantic import BaseModel, Field
from typing import List, Literal, Optional, Union

StatsRange = Literal["7d", "30d"]
# Counts and amounts keep whatever numeric type upstream sent (int stays int)
Number = Union[int, float]

class StatsParams(BaseModel):
    from_: str = Field(alias="from", description="ISO datetime, inclusive")
    to: str = Field(description="ISO datetime, inclusive")

    model_config = {"populate_by_name": True}

    def query(self) -> dict:
        return {"from": self.from_, "to": self.to}

class StatsOverview(BaseModel):
    totalOrders: Number = 0
    totalRevenue: Number = 0
    averageOrderValue: Number = 0
    successRate: Number = 0

class RevenuePoint(BaseModel):
    date: str
    revenue: Number = 0
    orders: Number = 0

class TeamBreakdownPoint(BaseModel):
    team: str
    orders: Number = 0
    revenue: Number = 0

class PaymentBreakdownPoint(BaseModel):
    method: str
    orders: Number = 0
    revenue: Number = 0

class QueryError(BaseModel):
    message: str
    status: Optional[int] = None

class KpiCard(BaseModel):
    key: str
    label: str
    value: Number
    unit: Optional[str] = None
    display: str

class QueryStatus(BaseModel):
    isLoading: bool = False
    isFetching: bool = False
    isError: bool = False
    error: Optional[QueryError] = None

class StatsResponse(QueryStatus):
    params: StatsParams
    overview: StatsOverview
    kpis: List[KpiCard] = Field(default_factory=list)
    revenueByDay: List[RevenuePoint] = Field(default_factory=list)
    teamBreakdown: List[TeamBreakdownPoint] = Field(default_factory=list)
    paymentBreakdown: List[PaymentBreakdownPoint] = Field(default_factory=list)

class TeamOverview(BaseModel):
    totalOrders: Number = 0
    totalRevenue: Number = 0
    averageOrderValue: Number = 0
    completedOrders: Number = 0
    pendingOrders: Number = 0
    successRate: Number = 0

class ShipmentSummary(BaseModel):
    total: Number = 0
    assigned: Number = 0
    inProgress: Number = 0
    delivered: Number = 0
    failed: Number = 0
    pending: Number = 0

class TeamStatsResponse(QueryStatus):
    params: StatsParams
    overview: TeamOverview
    timeline: List[RevenuePoint] = Field(default_factory=list)
    shipments: ShipmentSummary
