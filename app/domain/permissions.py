"""Role matrix for company-scoped operations.

OWNER and ADMIN manage the company, members and stores. MEMBER reads
stores and reports. STOCKIST only reads inventory.
"""

from app.domain.enums import CompanyRole, ReportNamespace

MANAGER_ROLES: frozenset[CompanyRole] = frozenset({CompanyRole.OWNER, CompanyRole.ADMIN})
READER_ROLES: frozenset[CompanyRole] = frozenset(
    {CompanyRole.OWNER, CompanyRole.ADMIN, CompanyRole.MEMBER}
)
ALL_ROLES: frozenset[CompanyRole] = frozenset(CompanyRole)

# Namespaces a STOCKIST may read.
STOCKIST_NAMESPACES: frozenset[ReportNamespace] = frozenset({ReportNamespace.INVENTORY})


def can_read_report(role: CompanyRole | str, namespace: ReportNamespace | str) -> bool:
    """Return True if a member with role may read the report namespace."""
    role = CompanyRole(role)
    if role == CompanyRole.STOCKIST:
        return ReportNamespace(namespace) in STOCKIST_NAMESPACES
    return role in READER_ROLES
