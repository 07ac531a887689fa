"""Top up operations: crediting active users with their company's amount.

Balances are mutated in place and not rolled back if a later company fails.
Every user belongs to exactly one company, so companies could be processed
in parallel without two workers touching the same user.
"""

from typing import Iterable, Mapping

from libs.common.logging import get_logger
from services.topup_service.exceptions import TopupError
from services.topup_service.models import Company, TokenChange, User

logger = get_logger(__name__)


def should_send_email(user: User, company: Company) -> bool:
    """Both the company and the user have to opt in."""
    return user.email_status and company.email_status


def send_email(user: User, company: Company, change: TokenChange) -> None:
    # Notifications are simulated; no mail leaves the process.
    logger.debug(
        "Would email %s about top up of %s from company %s",
        user.email,
        change.difference,
        company.id,
    )


def top_up_user(user: User, company: Company) -> TokenChange:
    previous_tokens = user.tokens
    user.top_up(company.top_up)
    email_sent = should_send_email(user, company)

    change = TokenChange(
        company_id=company.id,
        user_uuid=user.uuid,
        previous_tokens=previous_tokens,
        new_tokens=user.tokens,
        email_sent=email_sent,
    )
    if email_sent:
        send_email(user, company, change)
    return change


def top_up_company(company: Company, users: Iterable[User]) -> list[TokenChange]:
    """Top up the active users of one company, in the order given."""
    return [top_up_user(user, company) for user in users if user.is_active()]


def batch_top_up(
    companies: Iterable[Company],
    company_id_to_user_uuids: Mapping[object, list[str]],
    user_uuid_to_user: Mapping[str, User],
) -> list[TokenChange]:
    all_token_changes: list[TokenChange] = []
    for company in companies:
        user_uuids = company_id_to_user_uuids.get(company.id, [])
        try:
            company_users = [user_uuid_to_user[uuid] for uuid in user_uuids]
        except KeyError as e:
            raise TopupError(
                f"User {e.args[0]} indexed under company {company.id} is unknown"
            ) from e

        company_token_changes = top_up_company(company, company_users)
        if company_token_changes:
            logger.info(
                "Topped up %d users of company %s by %s",
                len(company_token_changes),
                company.id,
                company.top_up,
            )
        all_token_changes.extend(company_token_changes)
    return all_token_changes
