from pydantic import BaseModel


class AssetTypeTotalOut(BaseModel):
    type: str
    label: str
    total: int


class DashboardResponse(BaseModel):
    total_assets: int
    outstanding_liabilities: int
    paid_liabilities: int
    net_worth: int
    total_assets_display: str
    outstanding_liabilities_display: str
    net_worth_display: str
    asset_distribution: list[AssetTypeTotalOut]


class MemberSummaryOut(BaseModel):
    member_id: str
    name: str
    assets: int
    liabilities: int
    monthly_income: int
    net: int


class RepaymentLineOut(BaseModel):
    title: str
    amount: int
    member_name: str
    is_paid: bool


class MonthlyRepaymentOut(BaseModel):
    month: str
    month_label: str
    total: int
    total_display: str
    lines: list[RepaymentLineOut]


class ForecastMonthOut(BaseModel):
    month: str
    label: str
    income: int
    expenses: int
    balance: int
