"""CompanyService unit tests: slugs, invitations, and member removal rules."""

from unittest.mock import AsyncMock

import pytest

from app.application.dtos.company import CompanyResult, MemberResult
from app.application.dtos.user import UserResult
from app.application.services.company_service import CompanyService
from app.domain.enums import CompanyRole, InviteRole, InviteStatus
from app.domain.exceptions import (
    AuthorizationException,
    InvalidInviteException,
    InviteAlreadyPendingException,
    MemberAlreadyExistsException,
    ResourceNotFoundException,
)

COMPANY = CompanyResult(id="c1", name="Acme", slug="acme", plan="FREE", grandfathered=False)
ALICE = UserResult(id="u1", email="alice@example.com", name="Alice", is_active=True)


def _member(
    member_id: str = "m1",
    role: CompanyRole = CompanyRole.MEMBER,
    status: InviteStatus = InviteStatus.ACCEPTED,
    email: str = "bob@example.com",
    user_id: str | None = "u2",
) -> MemberResult:
    return MemberResult(
        id=member_id,
        company_id="c1",
        email=email,
        role=role.value,
        invite_status=status.value,
        user_id=user_id,
        invite_token="tok" if status == InviteStatus.PENDING else None,
    )


@pytest.fixture
def company_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=COMPANY)
    repo.slug_exists = AsyncMock(return_value=False)
    repo.create_company = AsyncMock(return_value=COMPANY)
    return repo


@pytest.fixture
def member_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_email = AsyncMock(return_value=None)
    repo.upsert_invite = AsyncMock(
        return_value=_member("m9", status=InviteStatus.PENDING, user_id=None)
    )
    return repo


@pytest.fixture
def user_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def notifier() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(company_repo, member_repo, user_repo, notifier) -> CompanyService:
    return CompanyService(company_repo, member_repo, user_repo, notifier)


async def test_create_company_makes_creator_owner(service, company_repo, member_repo, user_repo):
    company = await service.create_company(ALICE, "Acme")

    assert company.role == "OWNER"
    company_repo.create_company.assert_awaited_once_with(name="Acme", slug="acme")
    member_repo.add_owner.assert_awaited_once_with("c1", "u1", "alice@example.com")
    user_repo.set_current_company.assert_awaited_once_with("u1", "c1")


async def test_slug_collision_appends_counter(service, company_repo):
    company_repo.slug_exists.side_effect = [True, True, False]
    await service.create_company(ALICE, "Acme Corp")
    company_repo.create_company.assert_awaited_once_with(name="Acme Corp", slug="acme-corp-2")


async def test_invite_sends_notification(service, member_repo, notifier):
    invite = await service.invite_member("c1", "New@Example.com", InviteRole.STOCKIST, inviter=ALICE)

    assert invite.email == "new@example.com"
    assert invite.role == "STOCKIST"
    args = member_repo.upsert_invite.call_args.args
    assert args[:3] == ("c1", "new@example.com", "STOCKIST")
    notifier.send_invitation.assert_awaited_once()
    assert notifier.send_invitation.call_args.kwargs["token"] == invite.token
    assert notifier.send_invitation.call_args.kwargs["inviter_name"] == "Alice"


async def test_invite_existing_member_conflicts(service, member_repo, notifier):
    member_repo.get_by_email.return_value = _member(status=InviteStatus.ACCEPTED)
    with pytest.raises(MemberAlreadyExistsException):
        await service.invite_member("c1", "bob@example.com", InviteRole.MEMBER)
    notifier.send_invitation.assert_not_awaited()


async def test_invite_pending_conflicts(service, member_repo):
    member_repo.get_by_email.return_value = _member(status=InviteStatus.PENDING)
    with pytest.raises(InviteAlreadyPendingException):
        await service.invite_member("c1", "bob@example.com", InviteRole.MEMBER)


async def test_accept_invite_requires_matching_email(service, member_repo):
    member_repo.get_by_invite_token = AsyncMock(
        return_value=_member(status=InviteStatus.PENDING, email="bob@example.com", user_id=None)
    )
    with pytest.raises(InvalidInviteException):
        await service.accept_invite("tok", ALICE)
    member_repo.accept_invite.assert_not_awaited()


async def test_accept_invite_unknown_token(service, member_repo):
    member_repo.get_by_invite_token = AsyncMock(return_value=None)
    with pytest.raises(InvalidInviteException):
        await service.accept_invite("nope", ALICE)


async def test_accept_invite_joins_company(service, member_repo, user_repo):
    pending = _member(status=InviteStatus.PENDING, email="ALICE@example.com", user_id=None)
    member_repo.get_by_invite_token = AsyncMock(return_value=pending)
    member_repo.accept_invite = AsyncMock(
        return_value=_member(role=CompanyRole.MEMBER, email="alice@example.com", user_id="u1")
    )

    company = await service.accept_invite("tok", ALICE)

    assert company.role == "MEMBER"
    member_repo.accept_invite.assert_awaited_once_with("m1", "u1")
    user_repo.set_current_company.assert_awaited_once_with("u1", "c1")


async def test_owner_cannot_be_removed(service, member_repo):
    member_repo.get_by_id = AsyncMock(return_value=_member(role=CompanyRole.OWNER))
    actor = _member("m0", role=CompanyRole.OWNER, user_id="u1")
    with pytest.raises(AuthorizationException):
        await service.remove_member("c1", "m1", actor=actor)
    member_repo.remove.assert_not_awaited()


async def test_admin_cannot_remove_admin(service, member_repo):
    member_repo.get_by_id = AsyncMock(return_value=_member(role=CompanyRole.ADMIN))
    actor = _member("m0", role=CompanyRole.ADMIN, user_id="u1")
    with pytest.raises(AuthorizationException):
        await service.remove_member("c1", "m1", actor=actor)


async def test_owner_removes_admin_and_clears_current_company(service, member_repo, user_repo):
    member_repo.get_by_id = AsyncMock(return_value=_member(role=CompanyRole.ADMIN))
    user_repo.get_by_id = AsyncMock(
        return_value=UserResult(
            id="u2", email="bob@example.com", name="Bob", is_active=True, current_company_id="c1"
        )
    )
    actor = _member("m0", role=CompanyRole.OWNER, user_id="u1")

    await service.remove_member("c1", "m1", actor=actor)

    member_repo.remove.assert_awaited_once_with("m1")
    user_repo.set_current_company.assert_awaited_once_with("u2", None)


async def test_remove_member_of_other_company(service, member_repo):
    other = MemberResult(
        id="m1", company_id="c2", email="x@example.com", role="MEMBER", invite_status="ACCEPTED"
    )
    member_repo.get_by_id = AsyncMock(return_value=other)
    with pytest.raises(ResourceNotFoundException):
        await service.remove_member("c1", "m1", actor=_member("m0", role=CompanyRole.OWNER))


async def test_switch_company_requires_membership(service, member_repo, user_repo):
    member_repo.get_membership = AsyncMock(return_value=None)
    with pytest.raises(AuthorizationException):
        await service.switch_company("u1", "c1")
    user_repo.set_current_company.assert_not_awaited()
