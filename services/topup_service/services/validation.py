"""Turning raw records into validated Company / User entities.

Bad-but-parseable records are dropped without raising. The only skip that
is reported is a company id shared by several records; every record with
that id is dropped and one notice per id is printed to stdout.
"""

import secrets
from typing import Iterable, Optional

from libs.common.logging import get_logger
from pydantic import ValidationError
from services.topup_service.models import Company, User
from services.topup_service.schemas import CompanyRecord, UserRecord

logger = get_logger(__name__)

USER_UUID_BYTES = 4


class UserUuidGenerator:
    """Hands out short random hex ids, unique within one run."""

    def __init__(self, nbytes: int = USER_UUID_BYTES):
        self.nbytes = nbytes
        self._issued: set[str] = set()

    def __call__(self) -> str:
        while True:
            candidate = secrets.token_hex(self.nbytes)
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate


def parse_company_records(raw_companies: Iterable) -> list[Company]:
    companies: list[Company] = []
    for position, raw in enumerate(raw_companies):
        try:
            record = CompanyRecord.model_validate(raw)
        except ValidationError as e:
            logger.debug("Dropping malformed company record #%d: %s", position, e)
            continue
        companies.append(Company.from_record(record))
    return companies


def parse_user_records(
    raw_users: Iterable, uuid_generator: Optional[UserUuidGenerator] = None
) -> list[User]:
    """Build users, giving each one a fresh uuid regardless of its input id."""
    new_uuid = uuid_generator or UserUuidGenerator()
    users: list[User] = []
    for position, raw in enumerate(raw_users):
        try:
            record = UserRecord.model_validate(raw)
        except ValidationError as e:
            logger.debug("Dropping malformed user record #%d: %s", position, e)
            continue
        users.append(User.from_record(record, uuid=new_uuid()))
    return users


def dedupe_companies(companies: list[Company]) -> list[Company]:
    """Drop every company whose id is shared with another record."""
    company_id_to_companies: dict = {}
    for company in companies:
        company_id_to_companies.setdefault(company.id, []).append(company)

    non_dupe_companies: list[Company] = []
    for company_id, same_id_companies in company_id_to_companies.items():
        if len(same_id_companies) == 1:
            non_dupe_companies.extend(same_id_companies)
        else:
            notice = (
                f"Found multiple companies ({len(same_id_companies)}) with the same "
                f"id: {'' if company_id is None else company_id}. "
                "Skipping these companies."
            )
            # Skip notices are printed regardless of the configured log level
            print(notice)
            logger.debug(notice)
    return non_dupe_companies


def get_companies(raw_companies: Iterable) -> list[Company]:
    companies = dedupe_companies(parse_company_records(raw_companies))
    return [company for company in companies if company.is_valid()]


def get_users(
    raw_users: Iterable, uuid_generator: Optional[UserUuidGenerator] = None
) -> list[User]:
    users = parse_user_records(raw_users, uuid_generator=uuid_generator)
    return [user for user in users if user.is_valid()]
