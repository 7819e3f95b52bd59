"""Read-only salesperson earnings aggregate.

``salesperson_earnings`` is a database view owned by the migrations, not an
ORM table: it is described here as a lightweight ``table()`` construct so it
stays out of ``Base.metadata`` and ``create_all`` never materializes it.
"""

from __future__ import annotations

from sqlalchemy import column, table

SALESPERSON_EARNINGS_VIEW = "salesperson_earnings"

salesperson_earnings = table(
    SALESPERSON_EARNINGS_VIEW,
    column("salesperson_id"),
    column("pending_count"),
    column("approved_count"),
    column("rejected_count"),
    column("total_earnings"),
)

CREATE_SALESPERSON_EARNINGS_VIEW = f"""
CREATE VIEW {SALESPERSON_EARNINGS_VIEW} AS
SELECT
    salesperson_id,
    SUM(CASE WHEN status = 'pending' THEN 1 ELSE 0 END) AS pending_count,
    SUM(CASE WHEN status = 'approved' THEN 1 ELSE 0 END) AS approved_count,
    SUM(CASE WHEN status = 'rejected' THEN 1 ELSE 0 END) AS rejected_count,
    COALESCE(SUM(CASE WHEN status = 'approved' THEN approved_earnings ELSE 0 END), 0)
        AS total_earnings
FROM vendors
WHERE salesperson_id IS NOT NULL
GROUP BY salesperson_id
"""

DROP_SALESPERSON_EARNINGS_VIEW = f"DROP VIEW IF EXISTS {SALESPERSON_EARNINGS_VIEW}"
