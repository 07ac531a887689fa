"""Lookup tables joining users to their companies."""

from collections import defaultdict
from typing import Iterable

from services.topup_service.models import Company, User


def get_company_id_to_user_uuids(users: Iterable[User]) -> dict[object, list[str]]:
    """Map each company id to its users' uuids, in validated user order.

    Companies without users are simply absent; callers treat that as empty.
    """
    company_id_to_user_uuids: dict[object, list[str]] = defaultdict(list)
    for user in users:
        company_id_to_user_uuids[user.company_id].append(user.uuid)
    return dict(company_id_to_user_uuids)


def index_by_id(companies: Iterable[Company]) -> dict[object, Company]:
    return {company.id: company for company in companies}


def index_by_uuid(users: Iterable[User]) -> dict[str, User]:
    return {user.uuid: user for user in users}
