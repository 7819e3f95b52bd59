from onboarding.schemas.common import CamelModel

class EarningsSummaryOut(CamelModel):
    total_vendors: int
    pending_count: int
    approved_count: int
    rejected_count: int
    approval_rate: int
    total_earnings: int
    source: str
