"""Role matrix for company-scoped reads."""

import pytest

from app.domain.enums import CompanyRole, ReportNamespace
from app.domain.permissions import MANAGER_ROLES, READER_ROLES, can_read_report


@pytest.mark.parametrize("role", ["OWNER", "ADMIN", "MEMBER"])
@pytest.mark.parametrize("namespace", list(ReportNamespace))
def test_readers_see_every_report(role, namespace):
    assert can_read_report(role, namespace)


def test_stockist_reads_inventory_only():
    assert can_read_report(CompanyRole.STOCKIST, "inventory")
    assert not can_read_report(CompanyRole.STOCKIST, ReportNamespace.DASHBOARD)
    assert not can_read_report(CompanyRole.STOCKIST, ReportNamespace.PROFITS)


def test_unknown_role_is_rejected():
    with pytest.raises(ValueError):
        can_read_report("GUEST", ReportNamespace.ORDERS)


def test_managers_are_readers():
    assert MANAGER_ROLES < READER_ROLES
    assert CompanyRole.STOCKIST not in READER_ROLES
