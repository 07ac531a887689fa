"""Batch top up run: load -> validate -> index -> top up -> report."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from libs.common.logging import get_logger
from services.topup_service.models import Company, TokenChange, User
from services.topup_service.services.indexing import (
    get_company_id_to_user_uuids,
    index_by_id,
    index_by_uuid,
)
from services.topup_service.services.loader import load_records
from services.topup_service.services.reporting import generate_report
from services.topup_service.services.topup_ops import batch_top_up
from services.topup_service.services.validation import get_companies, get_users

logger = get_logger(__name__)


@dataclass
class TopupRun:
    """What a run worked on and what it changed."""

    companies: list[Company] = field(default_factory=list)
    users: list[User] = field(default_factory=list)
    token_changes: list[TokenChange] = field(default_factory=list)
    report: str = ""

    @property
    def emails_sent(self) -> int:
        return sum(1 for change in self.token_changes if change.email_sent)


def top_up_and_report(
    companies_file: Union[str, Path],
    users_file: Union[str, Path],
    output_file: Union[str, Path],
) -> TopupRun:
    # Both files are parsed before any balance changes
    raw_companies = load_records(companies_file)
    raw_users = load_records(users_file)

    companies = get_companies(raw_companies)
    users = get_users(raw_users)

    company_id_to_company = index_by_id(companies)
    user_uuid_to_user = index_by_uuid(users)
    company_id_to_user_uuids = get_company_id_to_user_uuids(users)

    token_changes = batch_top_up(companies, company_id_to_user_uuids, user_uuid_to_user)

    report = generate_report(
        token_changes, company_id_to_company, user_uuid_to_user, output_file
    )

    run = TopupRun(
        companies=companies,
        users=users,
        token_changes=token_changes,
        report=report,
    )
    logger.info(
        "Top up complete: %d valid companies, %d valid users, "
        "%d top ups, %d emails",
        len(run.companies),
        len(run.users),
        len(run.token_changes),
        run.emails_sent,
    )
    return run
