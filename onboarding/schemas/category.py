from datetime import datetime

from onboarding.schemas.common import CamelModel

class CategoryOut(CamelModel):
    id: str
    name: str
    description: str | None = None
    created_at: datetime | None = None
